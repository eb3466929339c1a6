"""
Reusable Typer Options Module

Global options shared by the main callback.
"""

from __future__ import annotations

import typer

from mediagallery.cli.common.context import LogLevel

# Count-based so -vv works
verbose_option = typer.Option(
    "--verbose",
    "-v",
    count=True,
    help="Enable verbose output (equivalent to --log-level DEBUG).",
)


log_level_option = typer.Option(
    "--log-level",
    case_sensitive=False,
    help="Set the logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Default: INFO.",
)


json_output_option = typer.Option(
    "--json",
    help="Enable machine-readable JSON output instead of human-readable format.",
)


config_option = typer.Option(
    "--config",
    "-c",
    envvar="MEDIAGALLERY_CONFIG",
    help="TOML file with default settings (height, sort order, ffmpeg paths, log file).",
    exists=True,
    dir_okay=False,
)


version_option = typer.Option(
    "--version",
    "-V",
    help="Show version information and exit.",
    is_eager=True,
)
