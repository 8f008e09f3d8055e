"""Export orchestrator for transcript_export.

This module provides the main entry point of the package, streaming
conversations out of an export file and writing one transcript each.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from transcript_export.importers.base import ConversationImportAdapter
from transcript_export.importers.chatgpt import ChatGPTAdapter
from transcript_export.interfaces.document import DocumentRendererInterface
from transcript_export.interfaces.image import ImageCodecInterface
from transcript_export.interfaces.markup import MarkupConverterInterface
from transcript_export.logging import get_logger
from transcript_export.models.conversation import ConversationRecord
from transcript_export.models.options import ExportOptions
from transcript_export.services.asset_resolver import AssetResolver, ConversationAssets
from transcript_export.services.content_renderer import ContentRenderer
from transcript_export.services.emitter import DocumentEmitter
from transcript_export.utils.paths import slugify_title, unique_path

__all__ = ["ExportResult", "TranscriptExporter"]

logger = get_logger(__name__)


@dataclass
class ExportResult:
    """Statistics from an export run."""

    conversations_discovered: int = 0
    conversations_exported: int = 0
    conversations_skipped: int = 0
    conversations_failed: int = 0
    files_written: list[Path] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


class TranscriptExporter:
    """Streams an export file into per-conversation transcripts.

    Conversations are handled one at a time, in file order. A failure
    inside one conversation is recorded and the run moves on; only an
    undecodable export (MalformedInputError) aborts the run.

    Example:
        exporter = TranscriptExporter(ExportOptions(asset_directory=Path("export")))
        result = exporter.export(Path("export/conversations.json"), Path("out"))
        print(result.conversations_exported, result.conversations_discovered)
    """

    def __init__(
        self,
        options: ExportOptions,
        *,
        adapter: ConversationImportAdapter | None = None,
        image_codec: ImageCodecInterface | None = None,
        converter: MarkupConverterInterface | None = None,
        renderer: DocumentRendererInterface | None = None,
    ) -> None:
        """Initialize exporter with run options and optional collaborators.

        Args:
            options: Run options
            adapter: Import adapter (defaults to ChatGPTAdapter)
            image_codec: Thumbnail codec (defaults to Pillow)
            converter: Markdown to HTML converter for PDF output
            renderer: PDF renderer (defaults to xhtml2pdf)
        """
        self._options = options
        self._adapter = adapter or ChatGPTAdapter()
        self._content_renderer = ContentRenderer(options, AssetResolver(image_codec))
        self._emitter = DocumentEmitter(
            converter,
            renderer,
            page_size=options.page_size,
            asset_directory=options.asset_directory,
        )

    def export(
        self,
        input_path: Path,
        output_dir: Path,
        should_export: Callable[[str], bool] | None = None,
        on_exported: Callable[[str, list[Path]], None] | None = None,
    ) -> ExportResult:
        """Export every conversation in ``input_path`` into ``output_dir``.

        Args:
            input_path: Export file (top-level JSON array)
            output_dir: Existing output directory
            should_export: Asked with each title; returning False skips it
            on_exported: Called with the title and written paths of each export

        Returns:
            ExportResult with statistics

        Raises:
            MalformedInputError: If the export cannot be decoded
        """
        result = ExportResult()

        for record in self._adapter.iter_file(input_path):
            result.conversations_discovered += 1
            title = record.display_title

            if should_export is not None and not should_export(title):
                result.conversations_skipped += 1
                logger.info("conversation_skipped", sequence=record.sequence, title=title)
                continue

            try:
                written = self.export_record(record, output_dir)
            except Exception as e:
                logger.error(
                    "conversation_export_failed",
                    sequence=record.sequence,
                    title=title,
                    error=str(e),
                )
                result.conversations_failed += 1
                result.errors.append(f"Conversation '{title}': {e}")
                continue

            if not written:
                result.conversations_failed += 1
                result.errors.append(f"Conversation '{title}': no output format was produced")
                continue

            result.conversations_exported += 1
            result.files_written.extend(written)
            if on_exported is not None:
                on_exported(title, written)

        logger.info(
            "export_completed",
            conversations_discovered=result.conversations_discovered,
            conversations_exported=result.conversations_exported,
            conversations_skipped=result.conversations_skipped,
            conversations_failed=result.conversations_failed,
        )

        return result

    def export_record(self, record: ConversationRecord, output_dir: Path) -> list[Path]:
        """Render and write a single conversation.

        Returns:
            Paths written for this conversation
        """
        stem = slugify_title(record.display_title, record.sequence)
        target_path = unique_path(output_dir, stem, ".md")
        assets = ConversationAssets(target_path=target_path)

        markdown = self._content_renderer.render_conversation(record, target_path, assets)
        written = self._emitter.emit(markdown, target_path, self._options.formats)

        logger.debug(
            "conversation_exported",
            sequence=record.sequence,
            target=str(target_path),
            assets_directory=str(assets.directory) if assets.created else None,
        )
        return written
