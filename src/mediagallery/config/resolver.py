"""Resolution of the effective gallery configuration.

Precedence: explicit request values, then the previous gallery's header,
then application settings.
"""

from __future__ import annotations

import logging
import re

from mediagallery.config.models import BuildRequest
from mediagallery.config.settings import Settings
from mediagallery.core.models import GalleryConfig, SortMode
from mediagallery.shared.errors import ErrorCode, create_config_error

logger = logging.getLogger(__name__)


def resolve_gallery_config(
    prior: GalleryConfig | None,
    request: BuildRequest,
    settings: Settings,
) -> GalleryConfig:
    """Merge request overrides with the prior configuration.

    Raises:
        ConfigurationError: On a non-positive height, unknown sort mode or an
            exclusion pattern that does not compile.
    """
    if request.height is not None:
        height = request.height
    elif prior is not None:
        height = prior.height
    else:
        height = settings.default_height
    if height <= 0:
        raise create_config_error(
            f"Invalid 'height' value: {height}",
            code=ErrorCode.INVALID_HEIGHT,
            config_key="height",
        )

    if request.sort_by:
        try:
            sort_by = SortMode(request.sort_by)
        except ValueError as e:
            raise create_config_error(
                f"Invalid 'sortby' value: {request.sort_by}",
                code=ErrorCode.INVALID_SORT_MODE,
                config_key="sort_by",
                original_error=e,
            ) from e
    elif prior is not None:
        sort_by = prior.sort_by
    else:
        sort_by = settings.default_sort_by

    exclude = request.exclude or (prior.exclude if prior is not None else None)
    if exclude:
        try:
            re.compile(exclude)
        except re.error as e:
            raise create_config_error(
                f"Invalid 'exclude' pattern: {exclude}",
                code=ErrorCode.INVALID_EXCLUDE_PATTERN,
                config_key="exclude",
                original_error=e,
            ) from e

    config = GalleryConfig(height=height, sort_by=sort_by, exclude=exclude or None)
    logger.info(
        "generation flags: height=%d sortby=%s%s",
        config.height,
        config.sort_by.value,
        f" exclude={config.exclude}" if config.exclude else "",
    )
    return config
