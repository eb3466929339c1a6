"""
Media collaborators: metadata extraction and preview rendering.
"""

from mediagallery.media.ffmpeg import FFmpegTools
from mediagallery.media.metadata import MediaMetadataExtractor
from mediagallery.media.preview import MediaPreviewProducer

__all__ = [
    "FFmpegTools",
    "MediaMetadataExtractor",
    "MediaPreviewProducer",
]
