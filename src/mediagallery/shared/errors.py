"""MediaGallery Error Handling Module

This module defines the error handling system for MediaGallery, providing
structured error classes with context information and user-friendly messages.

The error hierarchy follows these principles:
- One Source of Truth: All error codes are defined in ErrorCode enum
- Structured Context: ErrorContext provides additional information
- Proper Exception Chaining: Original exceptions are preserved
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Union

# Type alias for primitive context values (str, int, float, bool only)
PrimitiveContextValue = Union[str, int, float, bool]


class ErrorCode(str, Enum):
    """Error codes for MediaGallery.

    This enum serves as the single source of truth for all error codes
    used throughout the application.
    """

    # File System Errors
    DIRECTORY_NOT_FOUND = "DIRECTORY_NOT_FOUND"
    DIRECTORY_WALK_FAILED = "DIRECTORY_WALK_FAILED"
    FILE_READ_ERROR = "FILE_READ_ERROR"
    FILE_WRITE_ERROR = "FILE_WRITE_ERROR"

    # Artifact Errors
    ARTIFACT_PARSE_FAILED = "ARTIFACT_PARSE_FAILED"
    ARTIFACT_MAGIC_MISSING = "ARTIFACT_MAGIC_MISSING"
    ARTIFACT_HEADER_DUPLICATED = "ARTIFACT_HEADER_DUPLICATED"

    # Media Errors
    MEDIA_DECODE_FAILED = "MEDIA_DECODE_FAILED"
    MEDIA_FORMAT_UNSUPPORTED = "MEDIA_FORMAT_UNSUPPORTED"
    METADATA_PARSE_FAILED = "METADATA_PARSE_FAILED"
    TOOL_MISSING = "TOOL_MISSING"
    TOOL_FAILED = "TOOL_FAILED"
    TOOL_TIMEOUT = "TOOL_TIMEOUT"

    # Configuration Errors
    CONFIG_INVALID = "CONFIG_INVALID"
    INVALID_HEIGHT = "INVALID_HEIGHT"
    INVALID_SORT_MODE = "INVALID_SORT_MODE"
    INVALID_EXCLUDE_PATTERN = "INVALID_EXCLUDE_PATTERN"

    # CLI Errors
    CLI_INVALID_ARGUMENTS = "CLI_INVALID_ARGUMENTS"
    CLI_UNEXPECTED_ERROR = "CLI_UNEXPECTED_ERROR"
    CLI_COMMAND_INTERRUPTED = "CLI_COMMAND_INTERRUPTED"


def _coerce_primitives(value: Any | None) -> dict[str, PrimitiveContextValue] | None:
    """Coerce additional_data values to primitives.

    Converts Path and Enum values to primitive types.

    Raises:
        TypeError: If value is not a dict or contains unconvertible types
    """
    if value is None:
        return None

    if not isinstance(value, dict):
        error_msg = f"additional_data must be dict, got {type(value).__name__}"
        raise TypeError(error_msg)

    coerced: dict[str, PrimitiveContextValue] = {}
    for key, val in value.items():
        if isinstance(val, (str, int, float, bool)):
            coerced[key] = val
        elif isinstance(val, Path):
            coerced[key] = str(val)
        elif isinstance(val, Enum):
            coerced[key] = val.value
        else:
            error_msg = (
                f"Cannot coerce {type(val).__name__} to primitive type. "
                f"Only str, int, float, bool, Path, Enum are allowed."
            )
            raise TypeError(error_msg)

    return coerced


@dataclass(frozen=True)
class ErrorContext:
    """Context information for errors.

    Only primitive types (str, int, float, bool) are allowed in
    additional_data to keep log records serializable.

    Attributes:
        file_path: Optional file path associated with the error
        operation: Optional operation name that caused the error
        additional_data: Optional dict with primitive values only
    """

    file_path: str | None = None
    operation: str | None = None
    additional_data: dict[str, PrimitiveContextValue] | None = None

    def __post_init__(self) -> None:
        if self.additional_data is not None:
            coerced = _coerce_primitives(self.additional_data)
            object.__setattr__(self, "additional_data", coerced)

    def safe_dict(self) -> dict[str, Any]:
        """Export context as a dict that always carries ``additional_data``."""
        data: dict[str, Any] = {}
        if self.file_path is not None:
            data["file_path"] = self.file_path
        if self.operation is not None:
            data["operation"] = self.operation
        data["additional_data"] = dict(self.additional_data or {})
        return data


class MediaGalleryError(Exception):
    """Base exception class for all MediaGallery errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize MediaGalleryError.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            context: Additional context information
            original_error: Original exception that caused this error
        """
        self.code = code
        self.message = message
        self.context = context or ErrorContext()
        self.original_error = original_error
        super().__init__(f"{code.value}: {message}")

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging."""
        return {
            "code": self.code.value,
            "message": self.message,
            "context": self.context.safe_dict(),
            "original_error": str(self.original_error) if self.original_error else None,
        }


class DomainError(MediaGalleryError):
    """Domain-specific errors.

    Examples:
    - Malformed gallery artifact
    - Undecodable media content
    """


class InfrastructureError(MediaGalleryError):
    """Errors raised while talking to the file system or external tools."""


class ApplicationError(MediaGalleryError):
    """Application-level errors such as invalid configuration."""


class ArtifactParseError(DomainError):
    """The persisted gallery artifact could not be decoded."""


class MediaDecodeError(DomainError):
    """A media file could not be decoded into a preview."""


class ScanError(InfrastructureError):
    """Walking the gallery directory failed."""


class ArtifactWriteError(InfrastructureError):
    """The gallery artifact could not be written."""


class MediaToolError(InfrastructureError):
    """An external media tool (ffmpeg/ffprobe) failed or is missing."""


class ConfigurationError(ApplicationError):
    """User supplied or persisted configuration is invalid."""


class CliError(ApplicationError):
    """CLI-specific error carrying the process exit code."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
        command: str | None = None,
        exit_code: int = 1,
    ):
        super().__init__(code, message, context, original_error)
        self.command = command
        self.exit_code = exit_code


# Convenience functions for common error scenarios
def create_artifact_parse_error(
    message: str,
    code: ErrorCode = ErrorCode.ARTIFACT_PARSE_FAILED,
    line_number: int | None = None,
    original_error: Exception | None = None,
) -> ArtifactParseError:
    """Create an artifact parse error with context."""
    additional_data: dict[str, PrimitiveContextValue] | None = (
        {"line_number": line_number} if line_number is not None else None
    )
    context = ErrorContext(
        operation="unmarshal_page",
        additional_data=additional_data,
    )
    return ArtifactParseError(code, message, context, original_error)


def create_config_error(
    message: str,
    code: ErrorCode = ErrorCode.CONFIG_INVALID,
    config_key: str | None = None,
    original_error: Exception | None = None,
) -> ConfigurationError:
    """Create a configuration error with context."""
    additional_data: dict[str, PrimitiveContextValue] | None = (
        {"config_key": config_key} if config_key else None
    )
    context = ErrorContext(
        operation="resolve_gallery_config",
        additional_data=additional_data,
    )
    return ConfigurationError(code, message, context, original_error)


def create_scan_error(
    directory: str,
    original_error: Exception | None = None,
) -> ScanError:
    """Create a directory walk error with context."""
    context = ErrorContext(file_path=directory, operation="scan_directory")
    return ScanError(
        ErrorCode.DIRECTORY_WALK_FAILED,
        f"Failed to walk directory: {directory}",
        context,
        original_error,
    )


def create_tool_error(
    tool: str,
    message: str,
    file_path: str | None = None,
    code: ErrorCode = ErrorCode.TOOL_FAILED,
    original_error: Exception | None = None,
) -> MediaToolError:
    """Create an external tool error with context."""
    context = ErrorContext(
        file_path=file_path,
        operation=tool,
        additional_data={"tool": tool},
    )
    return MediaToolError(code, message, context, original_error)


def create_cli_error(
    message: str,
    command: str | None = None,
    code: ErrorCode = ErrorCode.CLI_UNEXPECTED_ERROR,
    original_error: Exception | None = None,
    exit_code: int = 1,
) -> CliError:
    """Create a CLI error with context."""
    additional_data: dict[str, PrimitiveContextValue] | None = (
        {"command": command} if command else None
    )
    context = ErrorContext(operation="cli", additional_data=additional_data)
    return CliError(code, message, context, original_error, command, exit_code)
