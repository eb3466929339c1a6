"""Core models and the incremental build pipeline."""

from .models import (
    GalleryConfig,
    GalleryPage,
    MediaFormat,
    MediaItem,
    MediaMetadata,
    Orientation,
    Preview,
    SortMode,
)

__all__ = [
    "GalleryConfig",
    "GalleryPage",
    "MediaFormat",
    "MediaItem",
    "MediaMetadata",
    "Orientation",
    "Preview",
    "SortMode",
]
