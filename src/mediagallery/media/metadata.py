"""
Media metadata extraction.

Creation time and orientation are read through an ordered chain of
timestamp sources per media format. A source returns None when it has
nothing to say about a file (no sidecar present), which moves extraction
on to the next source; any other failure is raised.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Protocol

import orjson
from PIL import ExifTags, Image, UnidentifiedImageError

from mediagallery.core.models import MediaFormat, Orientation
from mediagallery.core.protocols import ExtractedMetadata
from mediagallery.media.ffmpeg import FFmpegTools
from mediagallery.shared.constants import SidecarFiles
from mediagallery.shared.errors import ErrorCode, ErrorContext, MediaDecodeError

logger = logging.getLogger(__name__)

EXIF_TIME_FORMAT = "%Y:%m:%d %H:%M:%S"


def _metadata_error(path: Path, message: str, error: Exception | None = None) -> MediaDecodeError:
    return MediaDecodeError(
        ErrorCode.METADATA_PARSE_FAILED,
        message,
        ErrorContext(file_path=str(path), operation="extract_metadata"),
        error,
    )


def parse_exif_time(value: str) -> datetime:
    """Parse an EXIF ``YYYY:MM:DD HH:MM:SS`` value as UTC."""
    return datetime.strptime(value.strip().rstrip("\x00"), EXIF_TIME_FORMAT).replace(
        tzinfo=timezone.utc
    )


def creation_time_from_probe(data: Mapping[str, Any]) -> datetime | None:
    """Return ``format.tags.creation_time`` from ffprobe JSON, if any."""
    tags = (data.get("format") or {}).get("tags") or {}
    value = tags.get("creation_time")
    if not value:
        return None
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


class TimestampSource(Protocol):
    """One place a creation time may be found."""

    name: str

    def read(self, path: Path) -> ExtractedMetadata | None: ...


class ExifTimestampSource:
    """EXIF DateTimeOriginal (or DateTime) and Orientation via Pillow.

    A file without EXIF yields an empty result, not an error.
    """

    name = "exif"

    def read(self, path: Path) -> ExtractedMetadata | None:
        try:
            with Image.open(path) as image:
                exif = image.getexif()
        except (UnidentifiedImageError, OSError) as e:
            raise _metadata_error(path, f"cannot read EXIF: {e}", e) from e

        if not exif:
            return ExtractedMetadata()

        orientation = Orientation.from_exif(exif.get(ExifTags.Base.Orientation))
        raw_time = exif.get_ifd(ExifTags.IFD.Exif).get(ExifTags.Base.DateTimeOriginal)
        if not raw_time:
            raw_time = exif.get(ExifTags.Base.DateTime)
        if not raw_time:
            return ExtractedMetadata(orientation=orientation)

        try:
            create_time = parse_exif_time(str(raw_time))
        except ValueError as e:
            raise _metadata_error(path, f"invalid EXIF time {raw_time!r}", e) from e
        return ExtractedMetadata(create_time=create_time, orientation=orientation)


class SidecarJsonSource:
    """ffprobe-style JSON stored next to the media file (``<stem><suffix>``)."""

    def __init__(self, suffix: str) -> None:
        self.suffix = suffix
        self.name = f"sidecar{suffix}"

    def sidecar_path(self, path: Path) -> Path:
        return path.with_suffix(self.suffix)

    def read(self, path: Path) -> ExtractedMetadata | None:
        sidecar = self.sidecar_path(path)
        try:
            data = orjson.loads(sidecar.read_bytes())
        except FileNotFoundError:
            return None
        except (OSError, orjson.JSONDecodeError) as e:
            raise _metadata_error(path, f"invalid sidecar {sidecar.name}: {e}", e) from e

        if not isinstance(data, dict):
            raise _metadata_error(path, f"invalid sidecar {sidecar.name}")
        try:
            return ExtractedMetadata(create_time=creation_time_from_probe(data))
        except (AttributeError, TypeError, ValueError) as e:
            raise _metadata_error(path, f"invalid creation_time in {sidecar.name}", e) from e


class FfprobeSource:
    """Container tags read by running ffprobe."""

    name = "ffprobe"

    def __init__(self, tools: FFmpegTools) -> None:
        self.tools = tools

    def read(self, path: Path) -> ExtractedMetadata | None:
        data = self.tools.probe_format(path)
        try:
            return ExtractedMetadata(create_time=creation_time_from_probe(data))
        except (AttributeError, TypeError, ValueError) as e:
            raise _metadata_error(path, "invalid creation_time from ffprobe", e) from e


class MediaMetadataExtractor:
    """Extracts creation time and orientation by media format.

    JPEG reads EXIF. Videos read a sidecar JSON file and fall back to
    ffprobe. Other formats carry no creation time.
    """

    def __init__(
        self,
        tools: FFmpegTools,
        chains: Mapping[MediaFormat, Sequence[TimestampSource]] | None = None,
    ) -> None:
        if chains is None:
            video_chain: list[TimestampSource] = [
                *(SidecarJsonSource(suffix) for suffix in SidecarFiles.SUFFIXES),
                FfprobeSource(tools),
            ]
            chains = {
                MediaFormat.JPEG: [ExifTimestampSource()],
                MediaFormat.WEBM: video_chain,
                MediaFormat.MP4: video_chain,
            }
        self.chains = chains

    def extract(self, path: Path) -> ExtractedMetadata:
        media_format = MediaFormat.from_extension(path.suffix)
        for source in self.chains.get(media_format, ()) if media_format else ():
            result = source.read(path)
            if result is not None:
                logger.debug("%s: metadata from %s", path.name, source.name)
                return result
        return ExtractedMetadata()
