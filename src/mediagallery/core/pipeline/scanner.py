"""Directory scanner for the gallery pipeline.

Walks the gallery directory, groups files that differ only by extension,
keeps one canonical file per group and applies the exclusion pattern.
"""

from __future__ import annotations

import logging
import os
import re
from datetime import datetime, timezone
from pathlib import Path

from mediagallery.core.models import MediaFormat, MediaItem, MediaMetadata
from mediagallery.shared.errors import create_scan_error

logger = logging.getLogger(__name__)


def _canonical_extension(extensions: list[str]) -> str:
    """Pick the preferred extension: format priority, then lexical order."""
    return min(
        extensions,
        key=lambda ext: (MediaFormat.from_extension(ext).value, ext),  # type: ignore[union-attr]
    )


def _modify_time(stat_result: os.stat_result) -> datetime:
    # Microsecond precision so the value round-trips through the artifact.
    micros = stat_result.st_mtime_ns // 1_000
    return datetime.fromtimestamp(micros // 1_000_000, tz=timezone.utc).replace(
        microsecond=micros % 1_000_000
    )


def scan_directory(
    root: str | Path,
    preview_height: int,
    exclude: re.Pattern[str] | None = None,
) -> list[MediaItem]:
    """Enumerate the media items of a gallery directory.

    Item paths are relative to the parent of ``root`` and use forward
    slashes, so they start with the directory's own name.

    Args:
        root: Gallery directory.
        preview_height: Height recorded on every fresh item.
        exclude: Pattern searched in ``"/" + path``; matches are dropped.

    Returns:
        Items sorted by path, with file facts filled in and no preview.

    Raises:
        ScanError: If any part of the tree cannot be walked.
    """
    root = Path(root)
    base = root.parent

    def _on_error(error: OSError) -> None:
        raise create_scan_error(str(error.filename or root), original_error=error) from error

    groups: dict[str, list[str]] = {}
    stats: dict[str, os.stat_result] = {}
    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
        dirnames.sort()
        for filename in filenames:
            stem, ext = os.path.splitext(filename)
            if not ext or MediaFormat.from_extension(ext) is None:
                continue
            full_path = os.path.join(dirpath, filename)
            try:
                stat_result = os.stat(full_path)
            except OSError as e:
                raise create_scan_error(full_path, original_error=e) from e
            rel_stem = Path(os.path.relpath(os.path.join(dirpath, stem), base)).as_posix()
            groups.setdefault(rel_stem, []).append(ext)
            stats[rel_stem + ext] = stat_result

    items: list[MediaItem] = []
    for rel_stem, extensions in groups.items():
        rel_path = rel_stem + _canonical_extension(extensions)
        if exclude is not None and exclude.search("/" + rel_path):
            logger.debug("excluded %s", rel_path)
            continue
        stat_result = stats[rel_path]
        items.append(
            MediaItem(
                path=rel_path,
                metadata=MediaMetadata(
                    file_size=stat_result.st_size,
                    file_modify=_modify_time(stat_result),
                    preview_height=preview_height,
                ),
            )
        )

    items.sort(key=lambda item: item.path)
    logger.info("found %d items in %s", len(items), root)
    return items
