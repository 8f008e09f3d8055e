"""Image codec interface for transcript_export.

This module defines the Protocol for thumbnail generation.
"""

from pathlib import Path
from typing import Protocol, runtime_checkable

__all__ = [
    "ImageCodecInterface",
]


@runtime_checkable
class ImageCodecInterface(Protocol):
    """Contract for image codecs.

    Implementations decode an image, correct its orientation, shrink it
    to a maximum width and encode the result to a file.
    """

    def scale_down(self, source: Path, destination: Path, max_width: int) -> None:
        """Write an auto-oriented copy of ``source`` no wider than ``max_width``.

        Images already narrower than ``max_width`` keep their size.

        Args:
            source: Image file to read
            destination: File to write (format follows the source)
            max_width: Maximum width in pixels

        Raises:
            ThumbnailError: If the image cannot be decoded or encoded
        """
        ...
