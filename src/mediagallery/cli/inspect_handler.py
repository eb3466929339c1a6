"""Inspect command handler for MediaGallery CLI.

Decodes an existing gallery artifact and lists its configuration and
entries without touching any media.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.table import Table

from mediagallery.cli.common.context import get_cli_context
from mediagallery.cli.common.error_handler import handle_cli_error
from mediagallery.cli.json_formatter import format_json_output, write_json_output
from mediagallery.core.models import GalleryPage
from mediagallery.core.pipeline import load_previous_artifact
from mediagallery.core.pipeline.artifact import display_path, format_title_time
from mediagallery.shared.constants import CLICommands, CLIDefaults, CLIMessages
from mediagallery.shared.errors import ErrorCode, ErrorContext, InfrastructureError

logger = logging.getLogger(__name__)


def collect_inspect_data(page: GalleryPage) -> dict[str, Any]:
    return {
        "config": page.config.model_dump(mode="json"),
        "items": [
            {
                "path": display_path(item.path),
                "file_size": item.metadata.file_size,
                "effective_time": item.effective_time.isoformat(),
                "preview_height": item.metadata.preview_height,
                "mime_type": item.preview.mime_type if item.preview else None,
            }
            for item in page.items
        ],
    }


def display_inspect_results(console: Console, artifact: Path, page: GalleryPage) -> None:
    console.print(
        CLIMessages.INSPECT_TITLE.format(path=artifact, count=len(page.items)),
        markup=False,
        highlight=False,
        soft_wrap=True,
    )
    config = page.config
    console.print(
        f"height={config.height} sortby={config.sort_by.value}"
        + (f" exclude={config.exclude}" if config.exclude else ""),
        markup=False,
        highlight=False,
        soft_wrap=True,
    )

    table = Table(show_header=True, header_style="bold")
    table.add_column("Path", overflow="fold")
    table.add_column("Size", justify="right")
    table.add_column("Time")
    table.add_column("Preview")
    for item in page.items:
        table.add_row(
            display_path(item.path),
            str(item.metadata.file_size),
            format_title_time(item.effective_time),
            item.preview.mime_type if item.preview else "-",
        )
    console.print(table)


def handle_inspect_command(artifact: Path, console: Console | None = None) -> int:
    """Handle the inspect command.

    Returns:
        Exit code (0 for success, non-zero for a missing or malformed artifact)
    """
    context = get_cli_context()
    json_output = context.is_json_output_enabled()

    try:
        page, _ = load_previous_artifact(artifact)
        if page is None:
            raise InfrastructureError(
                ErrorCode.FILE_READ_ERROR,
                f"Gallery not found: {artifact}",
                ErrorContext(file_path=str(artifact), operation="inspect"),
            )
    except Exception as e:  # noqa: BLE001
        return handle_cli_error(e, CLICommands.INSPECT, json_output=json_output)

    if json_output:
        write_json_output(
            format_json_output(
                success=True,
                command=CLICommands.INSPECT,
                data=collect_inspect_data(page),
            )
        )
    else:
        display_inspect_results(console or Console(), artifact, page)
    return CLIDefaults.EXIT_SUCCESS
