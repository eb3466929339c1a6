"""
JSON Output Formatter for MediaGallery CLI

Envelope used by every command when the --json flag is given.
"""

from __future__ import annotations

import sys
from datetime import datetime, timezone
from typing import Any

import orjson

_JSON_OPTIONS = orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2


def format_json_output(
    success: bool,
    command: str,
    data: Any | None = None,
    errors: list[str] | None = None,
    warnings: list[str] | None = None,
) -> bytes:
    """
    Format command output as JSON.

    Args:
        success: Whether the command executed successfully
        command: The command name (e.g., "build", "inspect")
        data: The command's output data
        errors: List of error messages
        warnings: List of warning messages

    Returns:
        JSON-encoded bytes ready for output
    """
    errors = errors or []
    warnings = warnings or []
    if errors:
        success = False

    json_data = {
        "success": success,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "command": command,
        "data": data,
        "errors": errors,
        "warnings": warnings,
    }

    try:
        return orjson.dumps(json_data, option=_JSON_OPTIONS)
    except TypeError as e:
        json_data["success"] = False
        json_data["data"] = None
        json_data["errors"] = [f"JSON serialization failed: {e!s}"]
        return orjson.dumps(json_data, option=_JSON_OPTIONS)


def write_json_output(output: bytes) -> None:
    """Write a JSON envelope to stdout."""
    sys.stdout.buffer.write(output)
    sys.stdout.buffer.write(b"\n")
    sys.stdout.buffer.flush()
