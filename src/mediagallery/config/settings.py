"""MediaGallery Settings Configuration Model.

Application-wide defaults, overridable through ``MEDIAGALLERY_*``
environment variables or a TOML file.
"""

from __future__ import annotations

import logging
from pathlib import Path

import toml
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from mediagallery.core.models import SortMode
from mediagallery.shared.errors import create_config_error

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Defaults used when neither the CLI nor a previous gallery sets a value."""

    model_config = SettingsConfigDict(
        env_prefix="MEDIAGALLERY_",
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
    )

    default_height: int = Field(
        default=160,
        gt=0,
        description="Preview pixel height for new galleries",
    )
    default_sort_by: SortMode = Field(
        default=SortMode.CREATION_DATE,
        description="Sort order for new galleries",
    )
    ffmpeg_bin: str = Field(default="ffmpeg", description="ffmpeg executable")
    ffprobe_bin: str = Field(default="ffprobe", description="ffprobe executable")
    tool_timeout: float | None = Field(
        default=None,
        gt=0,
        description="Timeout in seconds for each ffmpeg/ffprobe call (None waits forever)",
    )
    log_file: Path | None = Field(default=None, description="Optional JSON log file")

    @classmethod
    def from_toml_file(cls, file_path: str | Path) -> Settings:
        """Load settings from a TOML file; environment variables still apply."""
        file_path = Path(file_path)
        if not file_path.exists():
            msg = f"Configuration file not found: {file_path}"
            raise FileNotFoundError(msg)

        raw_config = toml.load(file_path)
        logger.debug("Loaded settings from %s", file_path)
        return cls(**raw_config)


def load_settings(config_file: str | Path | None = None) -> Settings:
    """Settings from ``config_file`` when given, else from the environment alone.

    Raises:
        ConfigurationError: If the file is missing, is not valid TOML or
            holds invalid values.
    """
    if config_file is None:
        try:
            return Settings()
        except ValidationError as e:
            raise create_config_error(f"Invalid settings: {e}", original_error=e) from e

    try:
        return Settings.from_toml_file(config_file)
    except FileNotFoundError as e:
        raise create_config_error(str(e), config_key="config", original_error=e) from e
    except toml.TomlDecodeError as e:
        raise create_config_error(
            f"Invalid TOML in {config_file}: {e}", config_key="config", original_error=e
        ) from e
    except ValidationError as e:
        raise create_config_error(
            f"Invalid settings in {config_file}: {e}", config_key="config", original_error=e
        ) from e
