"""Pillow-backed image codec for transcript_export."""

from pathlib import Path

from PIL import Image, ImageOps

from transcript_export.exceptions import ThumbnailError
from transcript_export.logging import get_logger

__all__ = [
    "PillowImageCodec",
]

logger = get_logger(__name__)


class PillowImageCodec:
    """Thumbnail generation with Pillow.

    Implements ImageCodecInterface. Decoded images are closed before
    returning, on success and on failure.
    """

    def __init__(self, resample: Image.Resampling = Image.Resampling.LANCZOS) -> None:
        self._resample = resample

    def scale_down(self, source: Path, destination: Path, max_width: int) -> None:
        try:
            with Image.open(source) as image:
                image_format = image.format or "PNG"
                with ImageOps.exif_transpose(image) as oriented:
                    # thumbnail() only ever shrinks; the box height never binds
                    oriented.thumbnail((max_width, max(oriented.height, 1)), self._resample)
                    oriented.save(destination, format=image_format)
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            destination.unlink(missing_ok=True)
            raise ThumbnailError(source, str(e)) from e

        logger.debug("thumbnail_written", source=str(source), destination=str(destination))
