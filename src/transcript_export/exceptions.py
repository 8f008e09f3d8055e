"""Exceptions raised by transcript_export.

Only MalformedInputError aborts a run. The remaining errors are raised
inside a single asset or format step and degraded where they are caught.
"""

from pathlib import Path

__all__ = [
    "AssetCopyError",
    "MalformedInputError",
    "MissingAssetError",
    "RenderError",
    "ThumbnailError",
    "TranscriptExportError",
]


class TranscriptExportError(Exception):
    """Base class for all transcript_export errors."""


class MalformedInputError(TranscriptExportError):
    """Raised when the export stream cannot be decoded at all."""

    def __init__(self, source: Path | str, reason: str):
        self.source = str(source)
        self.reason = reason
        super().__init__(f"Could not decode conversation export {self.source}: {reason}")


class MissingAssetError(TranscriptExportError):
    """Raised when an asset pointer does not resolve to a file."""

    def __init__(self, pointer: str, asset_directory: Path | str):
        self.pointer = pointer
        self.asset_directory = str(asset_directory)
        super().__init__(f"No file for asset pointer {pointer} in {self.asset_directory}")


class AssetCopyError(TranscriptExportError):
    """Raised when an attachment cannot be copied into the assets folder."""

    def __init__(self, source: Path | str, reason: str):
        self.source = str(source)
        self.reason = reason
        super().__init__(f"Failed to copy asset {self.source}: {reason}")


class ThumbnailError(TranscriptExportError):
    """Raised when a thumbnail cannot be decoded, scaled or written."""

    def __init__(self, source: Path | str, reason: str):
        self.source = str(source)
        self.reason = reason
        super().__init__(f"Failed to create thumbnail for {self.source}: {reason}")


class RenderError(TranscriptExportError):
    """Raised when rich-text conversion or PDF rendering fails."""

    def __init__(self, target: Path | str, reason: str):
        self.target = str(target)
        self.reason = reason
        super().__init__(f"Failed to render {self.target}: {reason}")
