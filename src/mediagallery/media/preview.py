"""
Preview rendering.

Static images become a single JPEG (or PNG when not opaque). Animated
images and videos become an animated WebP of sampled frames. All previews
are exactly the requested height: shorter sources are padded with
transparent rows, taller ones are downscaled keeping the aspect ratio.
"""

from __future__ import annotations

import base64
import io
import logging
import tempfile
from pathlib import Path

from PIL import Image, ImageSequence, UnidentifiedImageError

from mediagallery.core.models import MediaFormat, Orientation, Preview
from mediagallery.media.ffmpeg import FFmpegTools
from mediagallery.shared.constants import MimeTypes, PreviewSettings
from mediagallery.shared.errors import ErrorCode, ErrorContext, MediaDecodeError

logger = logging.getLogger(__name__)

_ORIENTATION_TRANSPOSE: dict[Orientation, Image.Transpose] = {
    Orientation.FLIP_HORIZONTAL: Image.Transpose.FLIP_LEFT_RIGHT,
    Orientation.ROTATE_180: Image.Transpose.ROTATE_180,
    Orientation.FLIP_VERTICAL: Image.Transpose.FLIP_TOP_BOTTOM,
    Orientation.TRANSPOSE: Image.Transpose.TRANSPOSE,
    Orientation.ROTATE_270: Image.Transpose.ROTATE_270,
    Orientation.TRANSVERSE: Image.Transpose.TRANSVERSE,
    Orientation.ROTATE_90: Image.Transpose.ROTATE_90,
}


def _decode_error(
    path: Path,
    message: str,
    error: Exception | None = None,
    code: ErrorCode = ErrorCode.MEDIA_DECODE_FAILED,
) -> MediaDecodeError:
    return MediaDecodeError(
        code,
        message,
        ErrorContext(file_path=str(path), operation="produce_preview"),
        error,
    )


def apply_orientation(image: Image.Image, orientation: Orientation) -> Image.Image:
    """Undo the camera orientation so the image displays upright."""
    method = _ORIENTATION_TRANSPOSE.get(orientation)
    if method is None:
        return image
    return image.transpose(method)


def resize_image(image: Image.Image, height: int) -> Image.Image:
    """Fit ``image`` to exactly ``height`` pixels.

    Shorter images keep their width and are centered vertically on a
    transparent canvas; taller images are scaled down.
    """
    width, source_height = image.size
    if source_height < height:
        canvas = Image.new("RGBA", (width, height), (0, 0, 0, 0))
        canvas.paste(image.convert("RGBA"), (0, (height - source_height) // 2))
        return canvas
    if source_height > height:
        new_width = max(1, int(width * height / source_height + 0.5))
        return image.resize((new_width, height), Image.Resampling.BICUBIC)
    return image


def is_opaque(image: Image.Image) -> bool:
    if image.mode in ("RGBA", "LA", "PA"):
        alpha_min, _ = image.getchannel("A").getextrema()
        return alpha_min == 255
    return not (image.mode == "P" and "transparency" in image.info)


def encode_still(image: Image.Image) -> Preview:
    """JPEG when the image is fully opaque, PNG otherwise."""
    buffer = io.BytesIO()
    if is_opaque(image):
        if image.mode not in ("RGB", "L"):
            image = image.convert("RGB")
        image.save(buffer, format="JPEG", quality=PreviewSettings.JPEG_QUALITY)
        mime_type = MimeTypes.JPEG
    else:
        image.save(buffer, format="PNG")
        mime_type = MimeTypes.PNG
    return Preview(mime_type, base64.b64encode(buffer.getvalue()).decode("ascii"))


def encode_animation(frames: list[Image.Image], frame_ms: int) -> Preview:
    """Encode frames as a looping animated WebP."""
    buffer = io.BytesIO()
    frames[0].save(
        buffer,
        format="WEBP",
        save_all=True,
        append_images=frames[1:],
        duration=frame_ms,
        loop=0,
    )
    return Preview(MimeTypes.WEBP, base64.b64encode(buffer.getvalue()).decode("ascii"))


def sample_period(total_frames: int) -> int:
    """Stride between sampled frames of an animated image.

    Up to 1, 16, 256 frames sample 1, 2, 4 frames respectively; longer
    animations sample 8.
    """
    if total_frames <= 1:
        wanted = 1
    elif total_frames <= 16:
        wanted = 2
    elif total_frames <= 256:
        wanted = 4
    else:
        wanted = 8
    return max(1, total_frames // wanted)


def video_frame_count(duration: float) -> int:
    """Frames extracted in one pass from a short video."""
    if duration < PreviewSettings.VERY_SHORT_VIDEO_SECONDS:
        return PreviewSettings.VERY_SHORT_VIDEO_FRAMES
    return PreviewSettings.SHORT_VIDEO_FRAMES


class MediaPreviewProducer:
    """Renders previews with Pillow, using ffmpeg for video frames."""

    def __init__(self, tools: FFmpegTools) -> None:
        self.tools = tools

    def produce(self, path: Path, height: int, orientation: Orientation) -> Preview:
        media_format = MediaFormat.from_extension(path.suffix)
        if media_format is None:
            raise _decode_error(
                path,
                f"unsupported media format: {path.suffix}",
                code=ErrorCode.MEDIA_FORMAT_UNSUPPORTED,
            )

        try:
            if media_format.is_static_image:
                return self._still_preview(path, height, orientation)
            if media_format.is_animated_image:
                return self._animated_preview(path, height)
            return self._video_preview(path, height)
        except (UnidentifiedImageError, OSError, ValueError) as e:
            raise _decode_error(path, f"cannot decode {path.name}: {e}", e) from e

    def _still_preview(self, path: Path, height: int, orientation: Orientation) -> Preview:
        with Image.open(path) as image:
            image.load()
            oriented = apply_orientation(image, orientation)
            return encode_still(resize_image(oriented, height))

    def _animated_preview(self, path: Path, height: int) -> Preview:
        with Image.open(path) as image:
            total = getattr(image, "n_frames", 1)
            period = sample_period(total)
            frames = [
                resize_image(frame.convert("RGBA"), height)
                for index, frame in enumerate(ImageSequence.Iterator(image))
                if index % period == 0
            ]
        logger.debug("%s: sampled %d of %d frames", path.name, len(frames), total)
        return encode_animation(frames, PreviewSettings.ANIMATED_FRAME_MS)

    def _video_preview(self, path: Path, height: int) -> Preview:
        duration = self.tools.probe_duration(path)
        with tempfile.TemporaryDirectory(prefix="mediagallery-") as temp_dir:
            frame_dir = Path(temp_dir)
            if duration < PreviewSettings.SHORT_VIDEO_SECONDS:
                self.tools.extract_frames(
                    path,
                    height,
                    video_frame_count(duration),
                    duration,
                    frame_dir / PreviewSettings.FRAME_PATTERN,
                )
            else:
                seeks = PreviewSettings.LONG_VIDEO_SEEKS
                for i in range(1, seeks + 1):
                    self.tools.extract_frame_at(
                        path,
                        duration * i / (seeks + 1),
                        height,
                        frame_dir / (PreviewSettings.FRAME_PATTERN % i),
                    )

            frames = []
            for frame_path in sorted(frame_dir.glob("frame_*.jpeg")):
                with Image.open(frame_path) as frame:
                    frames.append(resize_image(frame.convert("RGB"), height))

        if not frames:
            raise _decode_error(path, f"ffmpeg produced no frames for {path.name}")
        return encode_animation(frames, PreviewSettings.VIDEO_FRAME_MS)
