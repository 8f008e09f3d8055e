"""Markdown to sanitized HTML conversion for transcript_export."""

import markdown
import nh3

from transcript_export.exceptions import RenderError

__all__ = [
    "SAFE_URL_SCHEMES",
    "MarkdownConverter",
]

SAFE_URL_SCHEMES = frozenset({"http", "https", "mailto"})


class MarkdownConverter:
    """Converts transcripts with Python-Markdown and sanitizes with nh3.

    Implements MarkupConverterInterface. Script and style elements are
    removed with their content, other disallowed tags are unwrapped, and
    any link whose scheme is not in SAFE_URL_SCHEMES loses its URL.
    Relative links pass through untouched.
    """

    def __init__(self, extensions: list[str] | None = None) -> None:
        self._extensions = extensions or ["fenced_code", "tables", "sane_lists"]

    def to_html(self, markdown_text: str) -> str:
        try:
            html = markdown.markdown(markdown_text, extensions=self._extensions)
        except Exception as e:  # noqa: BLE001 - extension errors surface as arbitrary types
            raise RenderError("<markdown>", str(e)) from e
        return nh3.clean(html, url_schemes=set(SAFE_URL_SCHEMES))
