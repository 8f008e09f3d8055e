"""Markup converter interface for transcript_export.

This module defines the Protocol for Markdown to HTML conversion.
"""

from typing import Protocol, runtime_checkable

__all__ = [
    "MarkupConverterInterface",
]


@runtime_checkable
class MarkupConverterInterface(Protocol):
    """Contract for Markdown to sanitized HTML conversion."""

    def to_html(self, markdown_text: str) -> str:
        """Convert Markdown into an HTML fragment.

        Raw HTML that could execute is stripped and links with unsafe
        schemes are dropped.

        Args:
            markdown_text: Markdown source

        Returns:
            Sanitized HTML body fragment
        """
        ...
