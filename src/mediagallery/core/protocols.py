"""Interfaces of the external media collaborators used by the pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Protocol

from mediagallery.core.models import Orientation, Preview


@dataclass(frozen=True)
class ExtractedMetadata:
    """Result of metadata extraction for one file."""

    create_time: datetime | None = None
    orientation: Orientation = Orientation.IDENTITY


class MetadataExtractor(Protocol):
    """Reads the creation time and orientation of a media file."""

    def extract(self, path: Path) -> ExtractedMetadata: ...


class PreviewProducer(Protocol):
    """Renders an encoded preview of a media file at a target height."""

    def produce(self, path: Path, height: int, orientation: Orientation) -> Preview: ...
