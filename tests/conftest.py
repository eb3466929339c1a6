"""
Pytest configuration and shared fixtures for MediaGallery tests.
"""

from __future__ import annotations

import base64
import logging
import os
import tempfile
from collections.abc import Callable, Generator
from datetime import datetime
from pathlib import Path

import pytest
from PIL import Image

from mediagallery.cli.common.context import clear_cli_context
from mediagallery.core.models import Orientation, Preview
from mediagallery.core.protocols import ExtractedMetadata
from mediagallery.shared.constants import Logging


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to the temporary directory.
    """
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture
def gallery_dir(temp_dir: Path) -> Path:
    """An empty ``photos`` gallery directory; its artifact is ``photos.html``."""
    directory = temp_dir / "photos"
    directory.mkdir()
    return directory


@pytest.fixture(autouse=True)
def reset_package_logger() -> Generator[None, None, None]:
    """Undo handler setup done by CLI invocations."""
    yield
    logger = logging.getLogger(Logging.ROOT_LOGGER)
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    clear_cli_context()


@pytest.fixture
def make_image() -> Callable[..., Path]:
    """Factory writing a solid-color image with Pillow."""

    def _make(
        path: Path,
        size: tuple[int, int] = (40, 20),
        color: tuple[int, ...] = (200, 30, 30),
        mode: str = "RGB",
        **save_kwargs: object,
    ) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        Image.new(mode, size, color).save(path, **save_kwargs)
        return path

    return _make


class FakeExtractor:
    """Metadata collaborator returning canned creation times."""

    def __init__(
        self,
        times: dict[str, datetime] | None = None,
        failing: set[str] | None = None,
        orientation: Orientation = Orientation.IDENTITY,
    ) -> None:
        self.times = times or {}
        self.failing = failing or set()
        self.orientation = orientation
        self.calls: list[str] = []

    def extract(self, path: Path) -> ExtractedMetadata:
        self.calls.append(path.name)
        if path.name in self.failing:
            raise ValueError(f"cannot read {path.name}")
        return ExtractedMetadata(
            create_time=self.times.get(path.name),
            orientation=self.orientation,
        )


class FakeProducer:
    """Preview collaborator encoding the file name and height as payload."""

    def __init__(self, failing: set[str] | None = None) -> None:
        self.failing = failing or set()
        self.calls: list[tuple[str, int, Orientation]] = []

    def produce(self, path: Path, height: int, orientation: Orientation) -> Preview:
        self.calls.append((path.name, height, orientation))
        if path.name in self.failing:
            raise ValueError(f"cannot decode {path.name}")
        payload = base64.b64encode(os.fsencode(f"{path.name}:{height}")).decode("ascii")
        return Preview("image/jpeg", payload)

    @property
    def names(self) -> list[str]:
        return sorted(name for name, _, _ in self.calls)


@pytest.fixture
def fake_extractor() -> FakeExtractor:
    return FakeExtractor()


@pytest.fixture
def fake_producer() -> FakeProducer:
    return FakeProducer()


@pytest.fixture
def fake_extractor_cls() -> type[FakeExtractor]:
    return FakeExtractor


@pytest.fixture
def fake_producer_cls() -> type[FakeProducer]:
    return FakeProducer
