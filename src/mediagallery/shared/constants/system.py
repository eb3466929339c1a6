"""
System Constants

This module contains logging, concurrency and timing constants shared
by the pipeline and the CLI.
"""

from __future__ import annotations


class Logging:
    """Logging configuration constants."""

    ROOT_LOGGER = "mediagallery"
    DEFAULT_LEVEL = "INFO"
    CONSOLE_TIME_FORMAT = "[%H:%M:%S]"


class Concurrency:
    """Worker pool constants."""

    MIN_WORKERS = 1
    THREAD_NAME_PREFIX = "preview"


class Progress:
    """Progress reporting constants."""

    REPORT_INTERVAL_SECONDS = 1.0
