"""Paginated document renderer interface for transcript_export.

This module defines the Protocol for HTML to PDF rendering.
"""

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

__all__ = [
    "DocumentRendererInterface",
]


@runtime_checkable
class DocumentRendererInterface(Protocol):
    """Contract for paginated document renderers."""

    def render(
        self,
        html: str,
        destination: Path,
        page_size: str,
        readable_roots: Sequence[Path] = (),
    ) -> None:
        """Render a complete HTML document to ``destination``.

        Args:
            html: Complete HTML document
            destination: Output file path
            page_size: Paper size name (e.g. "a4", "letter")
            readable_roots: Directories local images may be read from; the
                first one is the document's own directory

        Raises:
            RenderError: If the document cannot be produced
        """
        ...
