"""Tests for application settings and build requests."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from mediagallery.config import BuildRequest, Settings, load_settings
from mediagallery.core.models import SortMode
from mediagallery.shared.errors import ConfigurationError, ErrorCode


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("DEFAULT_HEIGHT", "DEFAULT_SORT_BY", "FFMPEG_BIN", "TOOL_TIMEOUT"):
        monkeypatch.delenv(f"MEDIAGALLERY_{name}", raising=False)

    settings = Settings()

    assert settings.default_height == 160
    assert settings.default_sort_by is SortMode.CREATION_DATE
    assert settings.ffmpeg_bin == "ffmpeg"
    assert settings.tool_timeout is None


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MEDIAGALLERY_DEFAULT_HEIGHT", "320")
    monkeypatch.setenv("MEDIAGALLERY_DEFAULT_SORT_BY", "file_path")
    monkeypatch.setenv("MEDIAGALLERY_TOOL_TIMEOUT", "30")

    settings = Settings()

    assert settings.default_height == 320
    assert settings.default_sort_by is SortMode.FILE_PATH
    assert settings.tool_timeout == 30.0


def test_invalid_environment_value(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MEDIAGALLERY_DEFAULT_HEIGHT", "0")

    with pytest.raises(ValidationError):
        Settings()


def test_from_toml_file(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MEDIAGALLERY_DEFAULT_HEIGHT", raising=False)
    config_file = temp_dir / "mediagallery.toml"
    config_file.write_text('default_height = 96\nffprobe_bin = "/opt/ffprobe"\n')

    settings = Settings.from_toml_file(config_file)

    assert settings.default_height == 96
    assert settings.ffprobe_bin == "/opt/ffprobe"


def test_from_missing_toml_file(temp_dir: Path) -> None:
    with pytest.raises(FileNotFoundError):
        Settings.from_toml_file(temp_dir / "missing.toml")


def test_load_settings_from_file(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MEDIAGALLERY_DEFAULT_SORT_BY", raising=False)
    config_file = temp_dir / "mediagallery.toml"
    config_file.write_text('default_sort_by = "file_path"\n')

    assert load_settings(config_file).default_sort_by is SortMode.FILE_PATH


def test_load_settings_without_file(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MEDIAGALLERY_DEFAULT_HEIGHT", "48")

    assert load_settings().default_height == 48


@pytest.mark.parametrize(
    "content",
    ["default_height = \"tall\"\n", "default_height = 0\n", "[[broken\n"],
)
def test_load_settings_invalid_file(temp_dir: Path, content: str) -> None:
    config_file = temp_dir / "mediagallery.toml"
    config_file.write_text(content)

    with pytest.raises(ConfigurationError) as exc_info:
        load_settings(config_file)

    assert exc_info.value.code == ErrorCode.CONFIG_INVALID


def test_load_settings_missing_file(temp_dir: Path) -> None:
    with pytest.raises(ConfigurationError):
        load_settings(temp_dir / "missing.toml")


def test_artifact_path_is_next_to_directory(temp_dir: Path) -> None:
    request = BuildRequest(directory=temp_dir / "photos")

    assert request.artifact_path == temp_dir.resolve() / "photos.html"


def test_artifact_path_of_trailing_dot(temp_dir: Path) -> None:
    request = BuildRequest(directory=temp_dir / "photos" / ".")

    assert request.artifact_path == temp_dir.resolve() / "photos.html"
