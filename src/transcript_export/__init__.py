"""transcript_export - Turn chat export archives into readable transcripts.

This package provides tools for:
- Streaming conversations out of very large ChatGPT exports
- Reconstructing the visible transcript from the conversation tree
- Rendering Markdown with copied attachments and thumbnails
- Deriving a PDF rendition from the same Markdown

Example usage:
    from pathlib import Path

    from transcript_export import ExportOptions, OutputFormat, TranscriptExporter

    options = ExportOptions(
        asset_directory=Path("export"),
        formats=frozenset({OutputFormat.MARKDOWN, OutputFormat.PDF}),
    )
    result = TranscriptExporter(options).export(
        Path("export/conversations.json"), Path("transcripts")
    )
"""

__version__ = "0.1.0"

from transcript_export.exceptions import MalformedInputError, TranscriptExportError
from transcript_export.importers.base import ConversationImportAdapter
from transcript_export.importers.chatgpt import ChatGPTAdapter
from transcript_export.models.options import (
    AttachmentStrategy,
    ExportMode,
    ExportOptions,
    OutputFormat,
)
from transcript_export.orchestrator import ExportResult, TranscriptExporter

__all__ = [  # noqa: RUF022
    # Orchestrator
    "TranscriptExporter",
    "ExportResult",
    # Options
    "AttachmentStrategy",
    "ExportMode",
    "ExportOptions",
    "OutputFormat",
    # Import adapters
    "ChatGPTAdapter",
    "ConversationImportAdapter",
    # Errors
    "MalformedInputError",
    "TranscriptExportError",
]
