"""
Artifact Constants

This module contains the markers and formats of the persisted
HTML gallery artifact.
"""

from __future__ import annotations


class ArtifactFormat:
    """Gallery artifact markup constants."""

    FILE_SUFFIX = ".html"
    MAGIC = "media-gallery"
    MAGIC_ATTR = "data-magic"
    GALLERY_ATTR = "data-gallery"
    MEDIA_ATTR = "data-media"
    HEADER_PREFIX = "<html"
    HEADER_SUFFIX = ">"
    ENTRY_PREFIX = "<a "
    ENTRY_SUFFIX = "</a>"
    TITLE_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
    DATA_URI_PREFIX = "data:"
    DATA_URI_BASE64_MARKER = ";base64,"
