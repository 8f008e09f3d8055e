"""HTML to PDF rendering with xhtml2pdf for transcript_export."""

from collections.abc import Sequence
from pathlib import Path

from xhtml2pdf import pisa
from xhtml2pdf.config.resources import ResourceAccessPolicy

from transcript_export.exceptions import RenderError
from transcript_export.logging import get_logger

__all__ = [
    "XHTML2PDFRenderer",
]

logger = get_logger(__name__)


class XHTML2PDFRenderer:
    """Paginated document renderer backed by xhtml2pdf.

    Implements DocumentRendererInterface. Local images must be given as
    absolute ``file://`` URIs or filesystem paths, and must live under one
    of the readable roots. Without roots xhtml2pdf only reads below the
    working directory and silently drops every other image.
    """

    def __init__(self, margin: str = "1.5cm") -> None:
        self._margin = margin

    def render(
        self,
        html: str,
        destination: Path,
        page_size: str,
        readable_roots: Sequence[Path] = (),
    ) -> None:
        document = self._with_page_rule(html, page_size)
        policy = self.resource_policy(destination, readable_roots)

        try:
            with destination.open("wb") as handle:
                status = pisa.CreatePDF(
                    document,
                    dest=handle,
                    encoding="utf-8",
                    resource_policy=policy,
                )
        except Exception as e:  # noqa: BLE001 - xhtml2pdf raises assorted internal errors
            destination.unlink(missing_ok=True)
            raise RenderError(destination, str(e)) from e

        if status.err:
            destination.unlink(missing_ok=True)
            raise RenderError(destination, f"xhtml2pdf reported {status.err} error(s)")

        logger.debug("pdf_written", destination=str(destination), page_size=page_size)

    @staticmethod
    def resource_policy(
        destination: Path,
        readable_roots: Sequence[Path],
    ) -> ResourceAccessPolicy:
        """Confine local reads to the given roots (default: the PDF's directory)."""
        roots = [Path(root).absolute() for root in readable_roots]
        base_dir = roots[0] if roots else destination.parent.absolute()
        return ResourceAccessPolicy(base_dir=base_dir, extra_roots=tuple(roots[1:]))

    def _with_page_rule(self, html: str, page_size: str) -> str:
        rule = f"<style>@page {{ size: {page_size}; margin: {self._margin}; }}</style>"
        if "</head>" in html:
            return html.replace("</head>", f"{rule}\n</head>", 1)
        return rule + html
