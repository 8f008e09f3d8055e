"""Markdown and PDF output for transcript_export.

The Markdown transcript is the single source for both formats. The PDF
is derived from it by build_pdf_html(), a pure function of the Markdown
text and the Markdown file's location.
"""

import os
import re
from collections.abc import Collection
from pathlib import Path
from urllib.parse import unquote

from bs4 import BeautifulSoup

from transcript_export.exceptions import RenderError
from transcript_export.infra.markdown_converter import MarkdownConverter
from transcript_export.interfaces.document import DocumentRendererInterface
from transcript_export.interfaces.markup import MarkupConverterInterface
from transcript_export.logging import get_logger
from transcript_export.models.options import OutputFormat
from transcript_export.utils.lazy_import import lazy_import
from transcript_export.utils.paths import encode_spaces, unique_path

__all__ = [
    "DocumentEmitter",
    "absolute_local_link",
    "absolutize_local_links",
    "build_pdf_html",
]

logger = get_logger(__name__)

_default_renderer = lazy_import(
    "transcript_export.infra.xhtml2pdf_renderer",
    "XHTML2PDFRenderer",
)

_SCHEME = re.compile(r"^[a-z][a-z0-9+.\-]*:", re.IGNORECASE)

STYLESHEET = """\
body { font-family: Helvetica, Arial, sans-serif; color: #1f2933; font-size: 12pt; line-height: 1.5; }
h1, h2, h3, h4 { color: #111827; }
pre { background: #f3f4f6; padding: 8pt; }
code { font-family: Courier, monospace; background: #f3f4f6; padding: 1pt 3pt; }
blockquote { border-left: 4px solid #d1d5db; margin: 0; padding: 2pt 10pt; color: #4b5563; background: #f9fafb; }
table { border-collapse: collapse; width: 100%; }
td, th { border: 1px solid #e5e7eb; padding: 5pt; text-align: left; }
"""


def absolute_local_link(link: str, base_dir: Path) -> str | None:
    """Turn a relative or absolute local path into a ``file://`` URI.

    The path is resolved lexically against ``base_dir``; the filesystem
    is not consulted. Links with a scheme, protocol-relative links and
    fragments are not local and yield None.
    """
    link = link.strip()
    if not link or link.startswith("#") or link.startswith("//") or _SCHEME.match(link):
        return None

    path = Path(unquote(link))
    if not path.is_absolute():
        path = Path(base_dir).absolute() / path

    normalized = os.path.normpath(path).replace("\\", "/")
    if not normalized.startswith("/"):
        normalized = "/" + normalized

    return "file://" + encode_spaces(normalized)


def absolutize_local_links(html: str, base_dir: Path) -> str:
    """Rewrite local ``img[src]`` and ``a[href]`` values to ``file://`` URIs."""
    if not html:
        return html

    soup = BeautifulSoup(html, "html.parser")
    for tag_name, attribute in (("img", "src"), ("a", "href")):
        for element in soup.find_all(tag_name):
            value = element.get(attribute)
            if not isinstance(value, str):
                continue
            absolute = absolute_local_link(value, base_dir)
            if absolute:
                element[attribute] = absolute

    return str(soup)


def build_pdf_html(
    markdown_text: str,
    markdown_path: Path,
    converter: MarkupConverterInterface,
) -> str:
    """Build the HTML document the PDF is rendered from.

    Args:
        markdown_text: Transcript Markdown
        markdown_path: Where the Markdown lives (or would live); relative
            links are resolved against its directory
        converter: Markdown to sanitized HTML converter

    Returns:
        Complete HTML document with absolute local links
    """
    body = converter.to_html(markdown_text)
    document = (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n'
        "<head>\n"
        '<meta charset="utf-8">\n'
        "<title>Conversation Export</title>\n"
        f"<style>\n{STYLESHEET}</style>\n"
        "</head>\n"
        "<body>\n"
        f"{body}\n"
        "</body>\n"
        "</html>\n"
    )
    return absolutize_local_links(document, markdown_path.parent)


class DocumentEmitter:
    """Writes a rendered transcript in the requested formats.

    A failed PDF is logged and left out of the result; the Markdown file
    and the rest of the run are unaffected.

    Example:
        emitter = DocumentEmitter(page_size="letter")
        written = emitter.emit(markdown, Path("out/hello.md"), {OutputFormat.MARKDOWN})
    """

    def __init__(
        self,
        converter: MarkupConverterInterface | None = None,
        renderer: DocumentRendererInterface | None = None,
        page_size: str = "a4",
        asset_directory: Path | None = None,
    ) -> None:
        """Initialize emitter.

        Args:
            converter: Markdown to HTML converter (defaults to MarkdownConverter)
            renderer: PDF renderer (defaults to xhtml2pdf, loaded on first use)
            page_size: Paper size for PDF output
            asset_directory: Exported attachments; referenced images stay here
        """
        self._converter = converter or MarkdownConverter()
        self._renderer = renderer
        self._page_size = page_size
        self._asset_directory = asset_directory

    def emit(
        self,
        markdown_text: str,
        target_path: Path,
        formats: Collection[OutputFormat],
    ) -> list[Path]:
        """Write the transcript in every requested format.

        Args:
            markdown_text: Rendered transcript
            target_path: Collision-free Markdown path
            formats: Requested output formats

        Returns:
            Paths actually written
        """
        written: list[Path] = []

        if OutputFormat.MARKDOWN in formats:
            target_path.write_text(markdown_text, encoding="utf-8")
            written.append(target_path)

        if OutputFormat.PDF in formats:
            pdf_path = unique_path(target_path.parent, target_path.stem, ".pdf")
            if self.write_pdf(markdown_text, target_path, pdf_path):
                written.append(pdf_path)

        return written

    def write_pdf(self, markdown_text: str, markdown_path: Path, pdf_path: Path) -> bool:
        """Render the PDF rendition; returns False if it was not produced."""
        try:
            html = build_pdf_html(markdown_text, markdown_path, self._converter)
            self._get_renderer(pdf_path).render(
                html,
                pdf_path,
                self._page_size,
                self.readable_roots(markdown_path),
            )
        except RenderError as e:
            logger.error("pdf_render_failed", markdown_path=str(markdown_path), error=str(e))
            return False

        return True

    def readable_roots(self, markdown_path: Path) -> list[Path]:
        """Directories the PDF may embed images from.

        Copies and thumbnails live next to the Markdown file; in reference
        mode, or when a copy failed, images stay in the asset directory.
        """
        roots = [markdown_path.parent.absolute()]
        if self._asset_directory is not None and self._asset_directory.is_dir():
            roots.append(self._asset_directory.absolute())
        return roots

    def _get_renderer(self, pdf_path: Path) -> DocumentRendererInterface:
        if self._renderer is None:
            try:
                renderer_cls = _default_renderer()
            except ImportError as e:
                raise RenderError(pdf_path, f"PDF renderer unavailable: {e}") from e
            self._renderer = renderer_cls()  # type: ignore[operator]
        return self._renderer
