"""Run option models for transcript_export.

These values are consumed by the export core. Validation of user input
and interactive prompting happen in the CLI before they are built.
"""

from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, Field

__all__ = [
    "AttachmentStrategy",
    "ExportMode",
    "ExportOptions",
    "OutputFormat",
]


class AttachmentStrategy(StrEnum):
    """How referenced attachments end up next to a transcript."""

    COPY = "copy"
    REFERENCE = "reference"


class OutputFormat(StrEnum):
    """Rendered document formats."""

    MARKDOWN = "markdown"
    PDF = "pdf"


class ExportMode(StrEnum):
    """Whether every conversation is exported or each one is confirmed."""

    AUTO = "auto"
    MANUAL = "manual"


class ExportOptions(BaseModel, frozen=True):
    """Options for a single export run.

    Attributes:
        asset_directory: Directory holding exported attachment files (may be missing)
        attachment_strategy: Copy attachments or reference the originals
        thumbnail_width: Maximum thumbnail width in pixels, 0 disables thumbnails
        formats: Non-empty set of output formats
        page_size: Paper size passed to the PDF renderer
    """

    asset_directory: Path
    attachment_strategy: AttachmentStrategy = AttachmentStrategy.COPY
    thumbnail_width: int = Field(default=512, ge=0)
    formats: frozenset[OutputFormat] = Field(
        default=frozenset({OutputFormat.MARKDOWN}),
        min_length=1,
    )
    page_size: str = "a4"

    @property
    def include_markdown(self) -> bool:
        return OutputFormat.MARKDOWN in self.formats

    @property
    def include_pdf(self) -> bool:
        return OutputFormat.PDF in self.formats
