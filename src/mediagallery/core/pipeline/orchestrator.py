"""Gallery build orchestration.

Runs one incremental build: read and decode the previous artifact, resolve
the configuration, scan, plan against the cache, compute pending items,
order, encode, and write the artifact only when its bytes changed.
"""

from __future__ import annotations

import logging
import os
import tempfile
import time
from dataclasses import dataclass
from pathlib import Path

from mediagallery.config import BuildRequest, Settings, resolve_gallery_config
from mediagallery.core.models import GalleryConfig, GalleryPage
from mediagallery.core.pipeline.artifact import marshal_page, unmarshal_page
from mediagallery.core.pipeline.cache import CacheStore
from mediagallery.core.pipeline.executor import execute_pending
from mediagallery.core.pipeline.ordering import order_items
from mediagallery.core.pipeline.planner import plan_work
from mediagallery.core.pipeline.scanner import scan_directory
from mediagallery.core.protocols import MetadataExtractor, PreviewProducer
from mediagallery.shared.errors import (
    ArtifactWriteError,
    ErrorCode,
    ErrorContext,
    InfrastructureError,
    ScanError,
)
from mediagallery.shared.logging import log_operation_start, log_operation_success

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuildResult:
    """Outcome of one gallery build."""

    artifact_path: Path
    config: GalleryConfig
    total: int
    cached: int
    processed: int
    failed: int
    written: bool

    @property
    def published(self) -> int:
        """Items that made it into the artifact."""
        return self.total - self.failed


def load_previous_artifact(artifact_path: Path) -> tuple[GalleryPage | None, bytes | None]:
    """Read and decode an existing artifact.

    Returns:
        ``(None, None)`` when there is no artifact yet.

    Raises:
        ArtifactParseError: If the artifact exists but is malformed.
        InfrastructureError: If the artifact exists but cannot be read.
    """
    try:
        data = artifact_path.read_bytes()
    except FileNotFoundError:
        return None, None
    except OSError as e:
        raise InfrastructureError(
            ErrorCode.FILE_READ_ERROR,
            f"Cannot read existing gallery: {artifact_path}",
            ErrorContext(file_path=str(artifact_path), operation="load_previous_artifact"),
            e,
        ) from e

    logger.info("parsing existing %s", artifact_path.name)
    return unmarshal_page(data), data


def write_artifact(artifact_path: Path, data: bytes) -> None:
    """Replace the artifact in full through a temporary file in the same directory."""
    try:
        fd, temp_name = tempfile.mkstemp(
            prefix=f".{artifact_path.name}.",
            suffix=".tmp",
            dir=artifact_path.parent,
        )
        temp_path = Path(temp_name)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.chmod(temp_path, 0o664)
            temp_path.replace(artifact_path)
        except BaseException:
            temp_path.unlink(missing_ok=True)
            raise
    except OSError as e:
        raise ArtifactWriteError(
            ErrorCode.FILE_WRITE_ERROR,
            f"Cannot write gallery: {artifact_path}",
            ErrorContext(file_path=str(artifact_path), operation="write_artifact"),
            e,
        ) from e


def _default_collaborators(settings: Settings) -> tuple[MetadataExtractor, PreviewProducer]:
    from mediagallery.media import (
        FFmpegTools,
        MediaMetadataExtractor,
        MediaPreviewProducer,
    )

    tools = FFmpegTools(
        ffmpeg_bin=settings.ffmpeg_bin,
        ffprobe_bin=settings.ffprobe_bin,
        timeout=settings.tool_timeout,
    )
    return MediaMetadataExtractor(tools), MediaPreviewProducer(tools)


def build_gallery(
    request: BuildRequest,
    settings: Settings | None = None,
    extractor: MetadataExtractor | None = None,
    producer: PreviewProducer | None = None,
) -> BuildResult:
    """Build or refresh the gallery artifact for ``request.directory``.

    Configuration and artifact errors are raised before any preview is
    computed. Per-item failures are logged and only drop the item.

    Raises:
        ScanError: If the directory is missing or cannot be walked.
        ArtifactParseError: If an existing artifact is malformed.
        ConfigurationError: If the effective configuration is invalid.
        ArtifactWriteError: If the new artifact cannot be written.
    """
    settings = settings or Settings()
    started = time.perf_counter()
    directory = request.directory.resolve()
    artifact_path = request.artifact_path
    log_operation_start(logger, "build_gallery", {"directory": str(directory)})

    if not directory.is_dir():
        raise ScanError(
            ErrorCode.DIRECTORY_NOT_FOUND,
            f"Directory not found: {directory}",
            ErrorContext(file_path=str(directory), operation="build_gallery"),
        )

    previous_page, previous_bytes = load_previous_artifact(artifact_path)
    config = resolve_gallery_config(
        previous_page.config if previous_page is not None else None,
        request,
        settings,
    )
    cache = CacheStore.from_page(previous_page, request.height)

    scanned = scan_directory(directory, config.height, config.exclude_pattern())
    plan = plan_work(scanned, cache)

    if extractor is None or producer is None:
        default_extractor, default_producer = _default_collaborators(settings)
        extractor = extractor or default_extractor
        producer = producer or default_producer

    report = execute_pending(
        plan.pending,
        directory.parent,
        config.height,
        extractor,
        producer,
        max_workers=request.procs,
    )
    logger.info("%d items processed (%d from cache)", plan.total, plan.reused)

    page = GalleryPage(config=config, items=order_items(plan.items, config.sort_by))
    data = marshal_page(page)

    written = data != previous_bytes
    if written:
        write_artifact(artifact_path, data)
        logger.info("wrote %s", artifact_path.name)
    else:
        logger.info("no changes made to %s", artifact_path.name)

    result = BuildResult(
        artifact_path=artifact_path,
        config=config,
        total=plan.total,
        cached=plan.reused,
        processed=report.processed,
        failed=report.preview_failures,
        written=written,
    )
    log_operation_success(
        logger,
        "build_gallery",
        (time.perf_counter() - started) * 1000,
        result_info={
            "total": result.total,
            "cached": result.cached,
            "processed": result.processed,
            "failed": result.failed,
            "written": result.written,
        },
    )
    return result
