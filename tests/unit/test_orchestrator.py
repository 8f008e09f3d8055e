"""Unit tests for the TranscriptExporter orchestrator."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from mocks.mock_renderer import FailingRenderer, RecordingRenderer
from transcript_export.exceptions import MalformedInputError
from transcript_export.models.options import ExportOptions, OutputFormat
from transcript_export.orchestrator import ExportResult, TranscriptExporter
from transcript_export.services.content_renderer import NO_TRANSCRIPT_PLACEHOLDER


class TestExportResult:
    """Tests for ExportResult defaults."""

    def test_defaults(self) -> None:
        result = ExportResult()
        assert result.conversations_discovered == 0
        assert result.conversations_exported == 0
        assert result.files_written == []
        assert result.errors == []


class TestTranscriptExporter:
    """Tests for TranscriptExporter.export."""

    def test_exports_every_conversation(
        self,
        options: ExportOptions,
        write_export: Callable[[Any], Path],
        output_dir: Path,
        hello_conversation: dict[str, Any],
    ) -> None:
        path = write_export([hello_conversation, {"title": "Second", "mapping": {}}])

        result = TranscriptExporter(options).export(path, output_dir)

        assert result.conversations_discovered == 2
        assert result.conversations_exported == 2
        assert result.conversations_failed == 0
        assert result.files_written == [output_dir / "hello.md", output_dir / "second.md"]
        assert NO_TRANSCRIPT_PLACEHOLDER in (output_dir / "second.md").read_text(encoding="utf-8")

    def test_rerun_does_not_overwrite(
        self,
        options: ExportOptions,
        write_export: Callable[[Any], Path],
        output_dir: Path,
        hello_conversation: dict[str, Any],
    ) -> None:
        path = write_export([hello_conversation])
        exporter = TranscriptExporter(options)

        exporter.export(path, output_dir)
        result = exporter.export(path, output_dir)

        assert result.files_written == [output_dir / "hello-1.md"]
        assert (output_dir / "hello.md").exists()

    def test_duplicate_titles_in_one_file(
        self,
        options: ExportOptions,
        write_export: Callable[[Any], Path],
        output_dir: Path,
        hello_conversation: dict[str, Any],
    ) -> None:
        path = write_export([hello_conversation, hello_conversation])

        result = TranscriptExporter(options).export(path, output_dir)

        assert [p.name for p in result.files_written] == ["hello.md", "hello-1.md"]

    def test_skip_hook(
        self,
        options: ExportOptions,
        write_export: Callable[[Any], Path],
        output_dir: Path,
    ) -> None:
        path = write_export([{"title": "Keep"}, {"title": "Drop"}, {"title": ""}])
        asked: list[str] = []

        def should_export(title: str) -> bool:
            asked.append(title)
            return title != "Drop"

        result = TranscriptExporter(options).export(path, output_dir, should_export=should_export)

        assert asked == ["Keep", "Drop", "Conversation 3"]
        assert result.conversations_skipped == 1
        assert result.conversations_exported == 2
        assert not (output_dir / "drop.md").exists()
        assert (output_dir / "conversation-3.md").exists()

    def test_on_exported_callback(
        self,
        options: ExportOptions,
        write_export: Callable[[Any], Path],
        output_dir: Path,
        hello_conversation: dict[str, Any],
    ) -> None:
        path = write_export([hello_conversation])
        seen: list[tuple[str, list[Path]]] = []

        TranscriptExporter(options).export(
            path, output_dir, on_exported=lambda title, paths: seen.append((title, paths))
        )

        assert seen == [("Hello", [output_dir / "hello.md"])]

    def test_failure_is_recorded_and_run_continues(
        self,
        options: ExportOptions,
        write_export: Callable[[Any], Path],
        output_dir: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        path = write_export([{"title": "Broken"}, {"title": "Fine"}])
        exporter = TranscriptExporter(options)
        original = exporter.export_record

        def flaky(record: Any, directory: Path) -> list[Path]:
            if record.title == "Broken":
                raise OSError("disk full")
            return original(record, directory)

        monkeypatch.setattr(exporter, "export_record", flaky)

        result = exporter.export(path, output_dir)

        assert result.conversations_failed == 1
        assert result.conversations_exported == 1
        assert result.errors == ["Conversation 'Broken': disk full"]
        assert (output_dir / "fine.md").exists()

    def test_pdf_failure_with_markdown_still_exports(
        self,
        export_dir: Path,
        write_export: Callable[[Any], Path],
        output_dir: Path,
        hello_conversation: dict[str, Any],
    ) -> None:
        options = ExportOptions(
            asset_directory=export_dir,
            thumbnail_width=0,
            formats=frozenset({OutputFormat.MARKDOWN, OutputFormat.PDF}),
        )
        path = write_export([hello_conversation])

        result = TranscriptExporter(options, renderer=FailingRenderer()).export(path, output_dir)

        assert result.conversations_exported == 1
        assert result.files_written == [output_dir / "hello.md"]

    def test_pdf_only_failure_counts_as_failed(
        self,
        export_dir: Path,
        write_export: Callable[[Any], Path],
        output_dir: Path,
        hello_conversation: dict[str, Any],
    ) -> None:
        options = ExportOptions(
            asset_directory=export_dir,
            thumbnail_width=0,
            formats=frozenset({OutputFormat.PDF}),
        )
        path = write_export([hello_conversation])

        result = TranscriptExporter(options, renderer=FailingRenderer()).export(path, output_dir)

        assert result.conversations_exported == 0
        assert result.conversations_failed == 1
        assert "no output format was produced" in result.errors[0]

    def test_pdf_only_success(
        self,
        export_dir: Path,
        write_export: Callable[[Any], Path],
        output_dir: Path,
        hello_conversation: dict[str, Any],
    ) -> None:
        options = ExportOptions(
            asset_directory=export_dir,
            thumbnail_width=0,
            formats=frozenset({OutputFormat.PDF}),
        )
        path = write_export([hello_conversation])

        result = TranscriptExporter(options, renderer=RecordingRenderer()).export(path, output_dir)

        assert result.files_written == [output_dir / "hello.pdf"]
        assert not (output_dir / "hello.md").exists()

    def test_malformed_input_writes_nothing(
        self,
        options: ExportOptions,
        write_export: Callable[[Any], Path],
        output_dir: Path,
    ) -> None:
        path = write_export('[{"title": "Hello", "mapping": {}}, {"title": "cut')

        with pytest.raises(MalformedInputError):
            TranscriptExporter(options).export(path, output_dir)

        assert list(output_dir.iterdir()) == []

    def test_empty_array(
        self,
        options: ExportOptions,
        write_export: Callable[[Any], Path],
        output_dir: Path,
    ) -> None:
        result = TranscriptExporter(options).export(write_export([]), output_dir)

        assert result.conversations_discovered == 0
        assert list(output_dir.iterdir()) == []
