"""Configuration: application settings, build requests and resolution."""

from .models import BuildRequest
from .resolver import resolve_gallery_config
from .settings import Settings, load_settings

__all__ = ["BuildRequest", "Settings", "load_settings", "resolve_gallery_config"]
