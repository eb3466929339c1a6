"""
CLI Error Handling Utilities

Maps exceptions raised by commands to CliError exit codes and prints them
either as a one-line message on stderr or as a JSON envelope on stdout.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

from mediagallery.cli.json_formatter import format_json_output, write_json_output
from mediagallery.shared.constants import CLIDefaults
from mediagallery.shared.errors import (
    ApplicationError,
    CliError,
    ConfigurationError,
    DomainError,
    ErrorCode,
    InfrastructureError,
    MediaGalleryError,
    create_cli_error,
)
from mediagallery.shared.logging import log_operation_error

logger = logging.getLogger(__name__)

EXIT_INTERRUPTED = 130


def handle_cli_error(
    error: BaseException,
    command: str,
    *,
    json_output: bool = False,
) -> int:
    """Handle CLI errors with consistent formatting and logging.

    Args:
        error: The exception that occurred
        command: The CLI command being executed
        json_output: Whether to output JSON format

    Returns:
        Exit code for the CLI command
    """
    error_context: dict[str, Any] = {
        "command": command,
        "error_type": type(error).__name__,
    }
    cli_error = _map_error_to_cli_error(error, command, error_context)
    _log_error(error, command, cli_error, error_context)
    _output_error(cli_error, error, command, error_context, json_output=json_output)
    return cli_error.exit_code


def _map_error_to_cli_error(  # noqa: PLR0911
    error: BaseException,
    command: str,
    error_context: dict[str, Any],
) -> CliError:
    if isinstance(error, CliError):
        error_context["error_code"] = error.code.value
        return error

    if isinstance(error, ConfigurationError):
        error_context["error_code"] = error.code.value
        return create_cli_error(
            message=f"Invalid configuration: {error.message}",
            command=command,
            code=ErrorCode.CLI_INVALID_ARGUMENTS,
            original_error=error,
            exit_code=CLIDefaults.EXIT_USAGE,
        )

    if isinstance(error, ApplicationError):
        error_context["error_code"] = error.code.value
        return create_cli_error(
            message=f"Application error: {error.message}",
            command=command,
            original_error=error,
        )

    if isinstance(error, DomainError):
        error_context["error_code"] = error.code.value
        return create_cli_error(
            message=error.message,
            command=command,
            original_error=error,
        )

    if isinstance(error, InfrastructureError):
        error_context["error_code"] = error.code.value
        return create_cli_error(
            message=f"Infrastructure error: {error.message}",
            command=command,
            original_error=error,
        )

    if isinstance(error, OSError):
        error_context["error_category"] = "file_system"
        return create_cli_error(
            message=f"File system error: {error}",
            command=command,
            original_error=error,
        )

    if isinstance(error, KeyboardInterrupt):
        error_context["interrupt_type"] = "user_interrupt"
        return create_cli_error(
            message="Command interrupted by user",
            command=command,
            code=ErrorCode.CLI_COMMAND_INTERRUPTED,
            exit_code=EXIT_INTERRUPTED,
        )

    error_context["error_category"] = "unexpected"
    return create_cli_error(
        message=f"Unexpected error: {error}",
        command=command,
        original_error=error if isinstance(error, Exception) else None,
    )


def _log_error(
    error: BaseException,
    command: str,
    cli_error: CliError,
    error_context: dict[str, Any],
) -> None:
    if isinstance(error, KeyboardInterrupt):
        logger.warning(
            "Command interrupted: %s",
            cli_error.message,
            extra={"context": error_context},
        )
    elif isinstance(error, MediaGalleryError):
        log_operation_error(logger, error, operation=command, context=error_context)
    else:
        logger.exception(
            "CLI error in %s: %s",
            command,
            cli_error.message,
            extra={"context": error_context},
        )


def _output_error(
    cli_error: CliError,
    error: BaseException,
    command: str,
    error_context: dict[str, Any],
    *,
    json_output: bool,
) -> None:
    if not json_output:
        sys.stderr.write(f"Error: {cli_error.message}\n")
        return

    write_json_output(
        format_json_output(
            success=False,
            command=command,
            errors=[cli_error.message],
            data={
                "error_code": cli_error.code.value,
                "error_type": type(error).__name__,
                "exit_code": cli_error.exit_code,
                "context": error_context,
            },
        )
    )
