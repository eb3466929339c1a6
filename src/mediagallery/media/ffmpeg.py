"""
ffmpeg/ffprobe adapter for video metadata and frame extraction.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Any

import orjson

from mediagallery.shared.errors import ErrorCode, create_tool_error

logger = logging.getLogger(__name__)


def _indent(text: str) -> str:
    return "\n".join("\t" + line for line in text.rstrip().splitlines())


class FFmpegTools:
    """
    Thin wrapper around the ffmpeg and ffprobe executables.

    Every failure is raised as MediaToolError; callers decide whether it
    is fatal.
    """

    def __init__(
        self,
        ffmpeg_bin: str = "ffmpeg",
        ffprobe_bin: str = "ffprobe",
        timeout: float | None = None,
    ) -> None:
        """
        Args:
            ffmpeg_bin: ffmpeg binary name or path
            ffprobe_bin: ffprobe binary name or path
            timeout: Per-call timeout in seconds, None to wait indefinitely
        """
        self.ffmpeg_bin = ffmpeg_bin
        self.ffprobe_bin = ffprobe_bin
        self.timeout = timeout

    def _run(self, cmd: list[str], file_path: Path) -> bytes:
        tool = Path(cmd[0]).name
        logger.debug("running %s", " ".join(cmd))
        try:
            process = subprocess.run(
                cmd,
                capture_output=True,
                check=False,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise create_tool_error(
                tool,
                f"{tool} not found in PATH",
                file_path=str(file_path),
                code=ErrorCode.TOOL_MISSING,
                original_error=e,
            ) from e
        except subprocess.TimeoutExpired as e:
            raise create_tool_error(
                tool,
                f"{tool} timeout after {self.timeout}s",
                file_path=str(file_path),
                code=ErrorCode.TOOL_TIMEOUT,
                original_error=e,
            ) from e

        if process.returncode != 0:
            output = (process.stderr or process.stdout).decode("utf-8", errors="replace")
            raise create_tool_error(
                tool,
                f"{tool} error (exit status {process.returncode})\n{_indent(output)}",
                file_path=str(file_path),
            )
        return process.stdout

    def probe_format(self, path: Path) -> dict[str, Any]:
        """Return ffprobe's ``-show_format`` JSON for a media file."""
        out = self._run(
            [
                self.ffprobe_bin,
                "-v", "quiet",
                str(path),
                "-print_format", "json",
                "-show_format",
            ],
            path,
        )
        try:
            data = orjson.loads(out)
        except orjson.JSONDecodeError as e:
            raise create_tool_error(
                "ffprobe",
                f"invalid ffprobe output: {e}",
                file_path=str(path),
                original_error=e,
            ) from e
        if not isinstance(data, dict):
            raise create_tool_error(
                "ffprobe", "invalid ffprobe output format", file_path=str(path)
            )
        return data

    def probe_duration(self, path: Path) -> float:
        """Return the container duration in seconds."""
        out = self._run(
            [
                self.ffprobe_bin,
                "-i", str(path),
                "-show_entries", "format=duration",
                "-v", "quiet",
                "-of", "csv=p=0",
            ],
            path,
        )
        text = out.decode("utf-8", errors="replace").strip()
        try:
            return float(text)
        except ValueError as e:
            raise create_tool_error(
                "ffprobe",
                f"invalid duration {text!r}",
                file_path=str(path),
                original_error=e,
            ) from e

    def extract_frames(
        self,
        path: Path,
        height: int,
        frame_count: int,
        duration: float,
        output_pattern: Path,
    ) -> None:
        """Extract ``frame_count`` evenly spaced frames in a single pass."""
        self._run(
            [
                self.ffmpeg_bin,
                "-i", str(path),
                "-vf", f"scale=-1:{height},fps={frame_count}/{duration:f}",
                str(output_pattern),
            ],
            path,
        )

    def extract_frame_at(
        self,
        path: Path,
        seek_seconds: float,
        height: int,
        output_file: Path,
    ) -> None:
        """Extract the single frame at ``seek_seconds``."""
        self._run(
            [
                self.ffmpeg_bin,
                "-ss", f"{seek_seconds:f}",
                "-i", str(path),
                "-vf", f"scale=-1:{height}",
                "-vframes", "1",
                str(output_file),
            ],
            path,
        )
