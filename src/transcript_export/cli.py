"""
transcript-export CLI - Command-line interface for transcript_export.

Turns a ChatGPT conversations.json export into one Markdown (and/or PDF)
transcript per conversation.
"""

from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from transcript_export import __version__
from transcript_export.config import ExportSettings
from transcript_export.exceptions import MalformedInputError
from transcript_export.logging import configure_from_settings
from transcript_export.models.options import (
    AttachmentStrategy,
    ExportMode,
    ExportOptions,
    OutputFormat,
)
from transcript_export.orchestrator import TranscriptExporter

app = typer.Typer(
    name="transcript-export",
    help="transcript-export - Convert chat exports into Markdown and PDF transcripts",
    no_args_is_help=True,
)

console = Console()


def warn(message: str) -> None:
    console.print(f"[yellow]Warning:[/yellow] {escape(message)}")


def normalize_asset_mode(value: str | None) -> AttachmentStrategy:
    """Parse --asset-mode, defaulting to copy for unknown values."""
    if not value:
        return AttachmentStrategy.COPY
    try:
        return AttachmentStrategy(value.strip().lower())
    except ValueError:
        warn(f'Unknown asset mode "{value}". Defaulting to copy.')
        return AttachmentStrategy.COPY


def normalize_thumbnail_width(value: int) -> int:
    if value < 0:
        warn("Thumbnail width cannot be negative. Thumbnails will be disabled.")
        return 0
    return value


def resolve_formats(value: str | None) -> frozenset[OutputFormat]:
    """Parse --format: markdown, pdf, both, or a comma separated list."""
    tokens = [token.strip() for token in (value or "").lower().split(",") if token.strip()]

    if not tokens:
        return frozenset({OutputFormat.MARKDOWN})
    if "both" in tokens:
        return frozenset({OutputFormat.MARKDOWN, OutputFormat.PDF})

    formats: set[OutputFormat] = set()
    for token in tokens:
        try:
            formats.add(OutputFormat(token))
        except ValueError:
            warn(f'Unknown format "{token}" ignored.')

    if not formats:
        warn("No valid export formats provided. Defaulting to markdown.")
        return frozenset({OutputFormat.MARKDOWN})

    return frozenset(formats)


def resolve_mode(value: str | None) -> ExportMode:
    """Parse --mode, asking interactively when it is missing or unknown."""
    normalized = (value or "").strip().lower()
    if normalized in (ExportMode.AUTO, ExportMode.MANUAL):
        return ExportMode(normalized)

    manual = typer.confirm(
        "Ask before exporting each conversation? (No exports every conversation)",
        default=False,
    )
    return ExportMode.MANUAL if manual else ExportMode.AUTO


def prepare_output_directory(path: Path) -> Path:
    """Create the output directory, exiting if the path is unusable."""
    output_dir = path.expanduser().resolve()

    if output_dir.exists() and not output_dir.is_dir():
        console.print(
            "[bold red]Error:[/bold red] The output path points to an existing file. "
            "Please supply a directory."
        )
        raise typer.Exit(1)

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        console.print(f"[bold red]Error:[/bold red] Could not create {escape(str(output_dir))}: {e}")
        raise typer.Exit(1) from e

    return output_dir


def load_settings() -> ExportSettings:
    """Read TRANSCRIPT_EXPORT_* settings, exiting on values that cannot be parsed."""
    try:
        return ExportSettings()
    except ValidationError as e:
        console.print("[bold red]Error:[/bold red] Invalid TRANSCRIPT_EXPORT_* setting:")
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"])
            console.print(f"  {escape(location)}: {escape(error['msg'])}")
        raise typer.Exit(1) from e


@app.command()
def export(
    file: Path = typer.Argument(..., help="Path to conversations.json"),
    output: Path = typer.Option(
        None, "--output", help="Directory for transcripts (defaults to ./conversations)"
    ),
    assets: Path = typer.Option(
        None, "--assets", help="Directory with exported attachments (defaults to the file's directory)"
    ),
    mode: str = typer.Option(
        None, "--mode", help="auto exports everything, manual asks before each conversation"
    ),
    asset_mode: str = typer.Option(
        None, "--asset-mode", help="Attachment strategy: copy (default) or reference"
    ),
    thumbnail_width: int = typer.Option(
        None, "--thumbnail-width", help="Maximum thumbnail width in pixels (0 disables thumbnails)"
    ),
    output_format: str = typer.Option(
        None, "--format", help="Export format: markdown, pdf, or both"
    ),
) -> None:
    """
    Export every conversation of an export file to its own transcript.
    """
    settings = load_settings()
    configure_from_settings(settings.logging)

    json_path = file.expanduser().resolve()
    if not json_path.is_file():
        console.print("[bold red]Error:[/bold red] The conversations file could not be found.")
        raise typer.Exit(1)

    output_dir = prepare_output_directory(output or settings.output_dir)

    asset_directory = (assets or json_path.parent).expanduser().resolve()
    if not asset_directory.is_dir():
        warn(
            "Attachment directory not found. "
            "Image references will point at the original asset pointers."
        )

    options = ExportOptions(
        asset_directory=asset_directory,
        attachment_strategy=normalize_asset_mode(asset_mode or settings.asset_mode),
        thumbnail_width=normalize_thumbnail_width(
            settings.thumbnail_width if thumbnail_width is None else thumbnail_width
        ),
        formats=resolve_formats(output_format or settings.formats),
        page_size=settings.pdf.page_size,
    )
    export_mode = resolve_mode(mode)

    def should_export(title: str) -> bool:
        if export_mode == ExportMode.AUTO:
            return True
        if typer.confirm(f'Export "{title}"?', default=True):
            return True
        console.print(f"Skipping {escape(title)}")
        return False

    def on_exported(title: str, paths: list[Path]) -> None:
        destinations = ", ".join(str(p) for p in paths)
        console.print(f"[green]Exported[/green] {escape(title)} -> {escape(destinations)}")

    exporter = TranscriptExporter(options)
    try:
        result = exporter.export(json_path, output_dir, should_export, on_exported)
    except MalformedInputError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1) from e

    for error in result.errors:
        warn(error)

    if result.conversations_discovered == 0:
        warn("No conversations discovered in the provided file.")
    else:
        console.print(
            f"Finished exporting {result.conversations_exported} of "
            f"{result.conversations_discovered} conversations into {escape(str(output_dir))}"
        )


@app.command()
def version() -> None:
    """Show the installed version."""
    console.print(f"transcript-export {__version__}")


if __name__ == "__main__":
    app()
