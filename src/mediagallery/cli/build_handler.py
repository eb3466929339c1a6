"""Build command handler for MediaGallery CLI."""

from __future__ import annotations

import logging

from rich.console import Console

from mediagallery.cli.common.context import get_cli_context
from mediagallery.cli.common.error_handler import handle_cli_error
from mediagallery.cli.json_formatter import format_json_output, write_json_output
from mediagallery.config import BuildRequest, Settings, load_settings
from mediagallery.core.pipeline import BuildResult, build_gallery
from mediagallery.shared.constants import CLICommands, CLIDefaults, CLIMessages

logger = logging.getLogger(__name__)


def collect_build_data(result: BuildResult) -> dict[str, object]:
    """Summary of a build for JSON output."""
    return {
        "artifact": str(result.artifact_path),
        "written": result.written,
        "total": result.total,
        "cached": result.cached,
        "processed": result.processed,
        "failed": result.failed,
        "published": result.published,
        "config": result.config.model_dump(mode="json"),
    }


def handle_build_command(
    request: BuildRequest,
    settings: Settings | None = None,
    console: Console | None = None,
) -> int:
    """Handle the build command.

    Args:
        request: Directory and generation overrides from the command line
        settings: Application settings (loaded from --config and the
            environment if None)
        console: Rich console for human-readable output

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    context = get_cli_context()
    json_output = context.is_json_output_enabled()

    try:
        settings = settings or load_settings(context.config_file)
        result = build_gallery(request, settings=settings)
    except Exception as e:  # noqa: BLE001
        return handle_cli_error(e, CLICommands.BUILD, json_output=json_output)

    if json_output:
        warnings = [f"{result.failed} items failed"] if result.failed else None
        write_json_output(
            format_json_output(
                success=True,
                command=CLICommands.BUILD,
                data=collect_build_data(result),
                warnings=warnings,
            )
        )
        return CLIDefaults.EXIT_SUCCESS

    console = console or Console()
    if result.written:
        message = CLIMessages.WROTE.format(
            path=result.artifact_path,
            total=result.published,
            cached=result.cached,
            failed=result.failed,
        )
    else:
        message = CLIMessages.NO_CHANGES.format(path=result.artifact_path)
    console.print(message, markup=False, highlight=False, soft_wrap=True)
    return CLIDefaults.EXIT_SUCCESS
