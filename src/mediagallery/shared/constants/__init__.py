"""
MediaGallery Constants Module

This module provides centralized constants for the MediaGallery application.
"""

from .artifact import ArtifactFormat
from .cli import CLICommands, CLIDefaults, CLIHelp, CLIMessages
from .file_formats import MediaExtensions, MimeTypes, PreviewSettings, SidecarFiles
from .system import Concurrency, Logging, Progress

__all__ = [
    "ArtifactFormat",
    "CLICommands",
    "CLIDefaults",
    "CLIHelp",
    "CLIMessages",
    "Concurrency",
    "Logging",
    "MediaExtensions",
    "MimeTypes",
    "PreviewSettings",
    "Progress",
    "SidecarFiles",
]
