"""Tests for the structured error hierarchy."""

from __future__ import annotations

from pathlib import Path

import pytest

from mediagallery.shared.errors import (
    ArtifactParseError,
    ConfigurationError,
    DomainError,
    ErrorCode,
    ErrorContext,
    InfrastructureError,
    MediaGalleryError,
    MediaToolError,
    ScanError,
    create_artifact_parse_error,
    create_config_error,
    create_scan_error,
    create_tool_error,
)


class TestErrorContext:
    def test_paths_and_enums_are_coerced(self) -> None:
        context = ErrorContext(
            additional_data={"path": Path("/a/b"), "code": ErrorCode.TOOL_FAILED, "n": 3}
        )

        assert context.additional_data == {"path": "/a/b", "code": "TOOL_FAILED", "n": 3}

    def test_non_primitive_values_are_rejected(self) -> None:
        with pytest.raises(TypeError):
            ErrorContext(additional_data={"items": [1, 2]})

    def test_safe_dict(self) -> None:
        context = ErrorContext(file_path="a.jpg", operation="scan")

        assert context.safe_dict() == {
            "file_path": "a.jpg",
            "operation": "scan",
            "additional_data": {},
        }


class TestHierarchy:
    def test_str_and_to_dict(self) -> None:
        cause = OSError("denied")
        error = create_scan_error("/photos", original_error=cause)

        assert str(error) == "DIRECTORY_WALK_FAILED: Failed to walk directory: /photos"
        assert error.to_dict() == {
            "code": "DIRECTORY_WALK_FAILED",
            "message": "Failed to walk directory: /photos",
            "context": {
                "file_path": "/photos",
                "operation": "scan_directory",
                "additional_data": {},
            },
            "original_error": "denied",
        }

    @pytest.mark.parametrize(
        ("error", "base"),
        [
            (create_artifact_parse_error("x"), DomainError),
            (create_scan_error("/x"), InfrastructureError),
            (create_tool_error("ffmpeg", "x"), InfrastructureError),
            (create_config_error("x"), MediaGalleryError),
        ],
    )
    def test_categories(self, error: MediaGalleryError, base: type) -> None:
        assert isinstance(error, base)

    def test_factory_types_and_context(self) -> None:
        parse_error = create_artifact_parse_error("bad", line_number=7)
        tool_error = create_tool_error(
            "ffprobe", "missing", file_path="clip.mp4", code=ErrorCode.TOOL_MISSING
        )
        config_error = create_config_error("bad", config_key="height")

        assert isinstance(parse_error, ArtifactParseError)
        assert parse_error.context.additional_data == {"line_number": 7}
        assert isinstance(tool_error, MediaToolError)
        assert tool_error.context.file_path == "clip.mp4"
        assert tool_error.code is ErrorCode.TOOL_MISSING
        assert isinstance(config_error, ConfigurationError)
        assert config_error.context.additional_data == {"config_key": "height"}
        assert isinstance(create_scan_error("/x"), ScanError)
