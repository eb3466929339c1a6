"""
File Format Constants

This module contains the media extensions the gallery understands and
the preview generation parameters for each kind of media.
"""

from __future__ import annotations


class MediaExtensions:
    """Lowercase extensions mapped to media formats in core.models."""

    JPEG = (".jpg", ".jpeg")
    PNG = (".png",)
    GIF = (".gif",)
    WEBP = (".webp",)
    WEBM = (".webm",)
    MP4 = (".mp4",)


class SidecarFiles:
    """ffprobe JSON sidecar suffixes, tried in order."""

    SUFFIXES = (".JSON", ".json")


class PreviewSettings:
    """Preview encoding parameters."""

    JPEG_QUALITY = 75
    ANIMATED_FRAME_MS = 250  # 4 fps
    VIDEO_FRAME_MS = 500  # 2 fps
    SHORT_VIDEO_SECONDS = 10.0
    VERY_SHORT_VIDEO_SECONDS = 5.0
    SHORT_VIDEO_FRAMES = 8
    VERY_SHORT_VIDEO_FRAMES = 4
    LONG_VIDEO_SEEKS = 10
    FRAME_PATTERN = "frame_%04d.jpeg"


class MimeTypes:
    """MIME types of generated previews."""

    JPEG = "image/jpeg"
    PNG = "image/png"
    WEBP = "image/webp"
