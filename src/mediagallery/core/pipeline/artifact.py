"""Gallery artifact codec.

The artifact is a line-oriented HTML page. The ``<html>`` line carries a
magic marker and the base64 JSON of the GalleryConfig; every ``<a>`` line is
one item with its preview as a data URI and its metadata as base64 JSON::

    <html data-magic="media-gallery" data-gallery="eyJoZWlnaHQiOjE2MCwi...">
    <body>
    <a href="photos/IMG_1.JPG" target="_blank"><img src="data:image/jpeg;base64,..." title="IMG_1.JPG; 2021-07-04 10:00:00" data-media="eyJm..."/></a>
    </body>
    </html>

Encoding is deterministic so that an unchanged gallery re-encodes to the
same bytes.
"""

from __future__ import annotations

import base64
import binascii
import html
import logging
import os
import posixpath
import xml.etree.ElementTree as ET
from datetime import datetime, timedelta, timezone
from typing import TypeVar
from urllib.parse import quote, unquote_to_bytes, urlsplit

import orjson
from pydantic import BaseModel, ValidationError

from mediagallery.core.models import (
    GalleryConfig,
    GalleryPage,
    MediaItem,
    MediaMetadata,
    Preview,
)
from mediagallery.shared.constants import ArtifactFormat
from mediagallery.shared.errors import ErrorCode, create_artifact_parse_error

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _encode_blob(model: BaseModel) -> str:
    data = orjson.dumps(
        model.model_dump(mode="json", exclude_none=True),
        option=orjson.OPT_SORT_KEYS,
    )
    return base64.b64encode(data).decode("ascii")


def _decode_blob(value: str | None, model: type[ModelT], line_number: int) -> ModelT:
    try:
        raw = base64.b64decode(value or "", validate=True)
        return model.model_validate(orjson.loads(raw))
    except (binascii.Error, orjson.JSONDecodeError, ValidationError) as e:
        raise create_artifact_parse_error(
            f"invalid {model.__name__} blob on line {line_number}: {e}",
            line_number=line_number,
            original_error=e,
        ) from e


def _parse_markup(markup: str, line_number: int) -> ET.Element:
    try:
        return ET.fromstring(markup)
    except ET.ParseError as e:
        raise create_artifact_parse_error(
            f"malformed markup on line {line_number}: {e}",
            line_number=line_number,
            original_error=e,
        ) from e


def format_title_time(value: datetime) -> str:
    """Format a timestamp in UTC, rounded half-up to the second."""
    rounded = (value + timedelta(microseconds=500_000)).replace(microsecond=0)
    return rounded.astimezone(timezone.utc).strftime(ArtifactFormat.TITLE_TIME_FORMAT)


def display_path(path: str) -> str:
    """Printable form of a gallery path.

    Undecodable file name bytes come back from os.walk as lone surrogates;
    they are shown as U+FFFD.
    """
    return os.fsencode(path).decode("utf-8", errors="replace")


def _entry_line(item: MediaItem, preview: Preview) -> str:
    # Percent-escape the original file name bytes so any name survives a round trip.
    href = html.escape(quote(os.fsencode(item.path), safe="/"))
    title = (
        html.escape(display_path(posixpath.basename(item.path)))
        + "; "
        + format_title_time(item.effective_time)
    )
    return (
        f'<a href="{href}" target="_blank">'
        f'<img src="{html.escape(preview.to_data_uri())}" title="{title}" '
        f'{ArtifactFormat.MEDIA_ATTR}="{_encode_blob(item.metadata)}"/></a>'
    )


def marshal_page(page: GalleryPage) -> bytes:
    """Encode a gallery page; items without a preview are left out."""
    lines = [
        f'<html {ArtifactFormat.MAGIC_ATTR}="{ArtifactFormat.MAGIC}" '
        f'{ArtifactFormat.GALLERY_ATTR}="{_encode_blob(page.config)}">',
        "<body>",
    ]
    lines.extend(_entry_line(item, item.preview) for item in page.items if item.preview)
    lines.extend(["</body>", "</html>"])
    return ("\n".join(lines) + "\n").encode("utf-8")


def _parse_entry(line: str, line_number: int) -> MediaItem:
    anchor = _parse_markup(line, line_number)
    image = anchor.find("img")
    if anchor.tag != "a" or image is None:
        raise create_artifact_parse_error(
            f"entry on line {line_number} is not an <a><img/></a> element",
            line_number=line_number,
        )

    path = os.fsdecode(unquote_to_bytes(urlsplit(anchor.get("href", "")).path))
    try:
        preview = Preview.from_data_uri(image.get("src", ""))
    except ValueError as e:
        raise create_artifact_parse_error(
            f"invalid preview source on line {line_number}: {e}",
            line_number=line_number,
            original_error=e,
        ) from e
    metadata = _decode_blob(image.get(ArtifactFormat.MEDIA_ATTR), MediaMetadata, line_number)
    return MediaItem(path=path, metadata=metadata, preview=preview)


def unmarshal_page(data: bytes | str) -> GalleryPage:
    """Decode an artifact produced by marshal_page.

    Only ``<html ...>`` and ``<a ...</a>`` lines are interpreted; any other
    line is ignored.

    Raises:
        ArtifactParseError: If the header is missing, duplicated or lacks the
            magic marker, or if any structural line or blob is malformed.
    """
    if isinstance(data, bytes):
        try:
            data = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise create_artifact_parse_error(
                f"artifact is not valid UTF-8: {e}", original_error=e
            ) from e

    config: GalleryConfig | None = None
    headers = 0
    items: list[MediaItem] = []
    for line_number, raw_line in enumerate(data.split("\n"), start=1):
        line = raw_line.strip()
        if line.startswith(ArtifactFormat.HEADER_PREFIX) and line.endswith(
            ArtifactFormat.HEADER_SUFFIX
        ):
            headers += 1
            element = _parse_markup(line + "</html>", line_number)
            if element.get(ArtifactFormat.MAGIC_ATTR) != ArtifactFormat.MAGIC:
                raise create_artifact_parse_error(
                    "missing magic marker",
                    code=ErrorCode.ARTIFACT_MAGIC_MISSING,
                    line_number=line_number,
                )
            config = _decode_blob(
                element.get(ArtifactFormat.GALLERY_ATTR), GalleryConfig, line_number
            )
        elif line.startswith(ArtifactFormat.ENTRY_PREFIX) and line.endswith(
            ArtifactFormat.ENTRY_SUFFIX
        ):
            items.append(_parse_entry(line, line_number))

    if headers < 1 or config is None:
        raise create_artifact_parse_error(
            "html tag missing", code=ErrorCode.ARTIFACT_MAGIC_MISSING
        )
    if headers > 1:
        raise create_artifact_parse_error(
            "html tag appeared multiple times",
            code=ErrorCode.ARTIFACT_HEADER_DUPLICATED,
        )

    logger.debug("decoded %d items from artifact", len(items))
    return GalleryPage(config=config, items=items)
