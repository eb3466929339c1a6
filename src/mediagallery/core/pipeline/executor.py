"""Concurrent recomputation of pending gallery items.

Each pending item is handled by exactly one worker of a bounded thread
pool. Failures are logged and confined to their item; the call returns only
once every item has finished.
"""

from __future__ import annotations

import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path

from mediagallery.core.models import MediaItem, MediaMetadata
from mediagallery.core.protocols import MetadataExtractor, PreviewProducer
from mediagallery.shared.constants import Concurrency, Progress

logger = logging.getLogger(__name__)


@dataclass
class ExecutionReport:
    """Counts of the recomputation phase."""

    processed: int = 0
    metadata_failures: int = 0
    preview_failures: int = 0


@dataclass(frozen=True)
class _ItemOutcome:
    metadata_ok: bool
    preview_ok: bool


def resolve_worker_count(limit: int | None) -> int:
    """Clamp the configured limit; None or <= 0 means one worker per CPU."""
    if limit is None or limit <= 0:
        limit = os.cpu_count() or Concurrency.MIN_WORKERS
    return max(Concurrency.MIN_WORKERS, limit)


def _process_item(
    item: MediaItem,
    base_dir: Path,
    height: int,
    extractor: MetadataExtractor,
    producer: PreviewProducer,
) -> _ItemOutcome:
    file_path = base_dir / item.path

    metadata_ok = True
    try:
        extracted = extractor.extract(file_path)
    except Exception as e:  # noqa: BLE001
        logger.warning("%s: loadMetadata error: %s", item.path, e)
        metadata_ok = False
    else:
        item.orientation = extracted.orientation
        if extracted.create_time is not None:
            item.metadata = MediaMetadata.model_validate(
                {**item.metadata.model_dump(), "media_create": extracted.create_time}
            )

    preview_ok = True
    try:
        item.preview = producer.produce(file_path, height, item.orientation)
    except Exception as e:  # noqa: BLE001
        logger.warning("%s: computePreview error: %s", item.path, e)
        item.preview = None
        preview_ok = False
    else:
        if not item.preview:
            logger.warning("%s: computePreview produced an empty preview", item.path)
            preview_ok = False

    return _ItemOutcome(metadata_ok=metadata_ok, preview_ok=preview_ok)


def execute_pending(
    pending: list[MediaItem],
    base_dir: Path,
    height: int,
    extractor: MetadataExtractor,
    producer: PreviewProducer,
    max_workers: int | None = None,
) -> ExecutionReport:
    """Compute metadata and previews for every pending item.

    Args:
        pending: Items to fill in place.
        base_dir: Directory item paths are relative to.
        height: Target preview height.
        extractor: Metadata collaborator, called once per item.
        producer: Preview collaborator, called once per item.
        max_workers: Worker limit (clamped to at least 1).

    Returns:
        ExecutionReport once all items have succeeded or failed.
    """
    report = ExecutionReport()
    if not pending:
        return report

    workers = resolve_worker_count(max_workers)
    logger.debug("computing %d items with %d workers", len(pending), workers)

    last_report = time.monotonic()
    with ThreadPoolExecutor(
        max_workers=workers,
        thread_name_prefix=Concurrency.THREAD_NAME_PREFIX,
    ) as pool:
        futures = [
            pool.submit(_process_item, item, base_dir, height, extractor, producer)
            for item in pending
        ]
        for future in as_completed(futures):
            outcome = future.result()
            report.processed += 1
            if not outcome.metadata_ok:
                report.metadata_failures += 1
            if not outcome.preview_ok:
                report.preview_failures += 1

            now = time.monotonic()
            if now - last_report > Progress.REPORT_INTERVAL_SECONDS:
                logger.info(
                    "%d items processed (%0.3f%%)",
                    report.processed,
                    100.0 * report.processed / len(pending),
                )
                last_report = now

    return report
