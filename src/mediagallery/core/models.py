"""Core data models for MediaGallery.

Items are plain data: the orientation transform is a tag interpreted by the
preview producer, and previews are stored as encoded payloads, so items can
be read concurrently and serialized deterministically.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mediagallery.shared.constants import ArtifactFormat, MediaExtensions


class MediaFormat(Enum):
    """Supported media formats.

    The value is the collision priority: when several files share a name
    and differ only by extension, the lowest value wins. Static images rank
    before animated images, which rank before videos.
    """

    JPEG = 1
    PNG = 2
    GIF = 3
    WEBP = 4
    WEBM = 5
    MP4 = 6

    @classmethod
    def from_extension(cls, extension: str) -> MediaFormat | None:
        """Return the format for an extension (with dot, any case)."""
        return _EXTENSION_FORMATS.get(extension.lower())

    @property
    def is_static_image(self) -> bool:
        return self in (MediaFormat.JPEG, MediaFormat.PNG)

    @property
    def is_animated_image(self) -> bool:
        return self in (MediaFormat.GIF, MediaFormat.WEBP)

    @property
    def is_video(self) -> bool:
        return self in (MediaFormat.WEBM, MediaFormat.MP4)


_EXTENSION_FORMATS: dict[str, MediaFormat] = {
    **dict.fromkeys(MediaExtensions.JPEG, MediaFormat.JPEG),
    **dict.fromkeys(MediaExtensions.PNG, MediaFormat.PNG),
    **dict.fromkeys(MediaExtensions.GIF, MediaFormat.GIF),
    **dict.fromkeys(MediaExtensions.WEBP, MediaFormat.WEBP),
    **dict.fromkeys(MediaExtensions.WEBM, MediaFormat.WEBM),
    **dict.fromkeys(MediaExtensions.MP4, MediaFormat.MP4),
}


class Orientation(Enum):
    """EXIF orientation tags (values match the EXIF Orientation field)."""

    IDENTITY = 1
    FLIP_HORIZONTAL = 2
    ROTATE_180 = 3
    FLIP_VERTICAL = 4  # rotate 180 + flip horizontal
    TRANSPOSE = 5
    ROTATE_270 = 6
    TRANSVERSE = 7
    ROTATE_90 = 8

    @classmethod
    def from_exif(cls, value: object) -> Orientation:
        """Map a raw EXIF orientation value, defaulting to IDENTITY."""
        try:
            return cls(int(value))  # type: ignore[call-overload]
        except (TypeError, ValueError):
            return cls.IDENTITY


class SortMode(str, Enum):
    """Presentation order of the gallery."""

    CREATION_DATE = "creation_date"
    FILE_PATH = "file_path"


def _as_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class GalleryConfig(BaseModel):
    """Generation parameters persisted in the artifact header."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    height: int = Field(gt=0, description="Pixel height of each preview")
    sort_by: SortMode = Field(description="Presentation order")
    exclude: str | None = Field(
        default=None,
        description="Regular expression of slash-prefixed paths to exclude",
    )

    def exclude_pattern(self) -> re.Pattern[str] | None:
        """Compile the exclusion pattern (None when unset)."""
        if not self.exclude:
            return None
        return re.compile(self.exclude)


class MediaMetadata(BaseModel):
    """Per-item facts persisted in the artifact and used for cache validity."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    file_size: int = Field(ge=0)
    file_modify: datetime
    media_create: datetime | None = None
    preview_height: int = Field(gt=0)

    @field_validator("file_modify", "media_create")
    @classmethod
    def normalize_timezone(cls, v: datetime | None) -> datetime | None:
        """Store every timestamp as an aware UTC datetime."""
        return _as_utc(v)


@dataclass(frozen=True)
class Preview:
    """An encoded preview image: MIME type plus base64 payload."""

    mime_type: str
    payload: str

    def to_data_uri(self) -> str:
        return (
            f"{ArtifactFormat.DATA_URI_PREFIX}{self.mime_type}"
            f"{ArtifactFormat.DATA_URI_BASE64_MARKER}{self.payload}"
        )

    @classmethod
    def from_data_uri(cls, uri: str) -> Preview:
        """Parse ``data:<mime>;base64,<payload>``.

        Raises:
            ValueError: If the URI is not a base64 data URI.
        """
        if not uri.startswith(ArtifactFormat.DATA_URI_PREFIX):
            raise ValueError(f"not a data URI: {uri[:32]!r}")
        head, sep, payload = uri[len(ArtifactFormat.DATA_URI_PREFIX) :].partition(
            ArtifactFormat.DATA_URI_BASE64_MARKER
        )
        if not sep or not head:
            raise ValueError(f"not a base64 data URI: {uri[:32]!r}")
        return cls(mime_type=head, payload=payload.strip())

    def __bool__(self) -> bool:
        return bool(self.payload)


@dataclass(slots=True)
class MediaItem:
    """One media subject tracked through scan, cache, and output.

    Attributes:
        path: Slash-separated path relative to the gallery's parent directory
        metadata: File facts, creation time and preview height
        orientation: Transform to apply before resizing (never persisted)
        preview: Encoded preview, None until computed
    """

    path: str
    metadata: MediaMetadata
    orientation: Orientation = Orientation.IDENTITY
    preview: Preview | None = None

    @property
    def media_format(self) -> MediaFormat | None:
        _, dot, ext = self.path.rpartition(".")
        return MediaFormat.from_extension(f".{ext}") if dot else None

    @property
    def effective_time(self) -> datetime:
        """Media creation time if known, else file modification time."""
        return self.metadata.media_create or self.metadata.file_modify

    @property
    def has_preview(self) -> bool:
        return bool(self.preview)


@dataclass
class GalleryPage:
    """A decoded artifact: its configuration and ordered items."""

    config: GalleryConfig
    items: list[MediaItem] = field(default_factory=list)
