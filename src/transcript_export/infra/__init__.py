"""Default implementations of the external collaborators.

The PDF renderer pulls in xhtml2pdf and reportlab, so it is imported
lazily by the emitter instead of being re-exported here.
"""

from transcript_export.infra.markdown_converter import MarkdownConverter
from transcript_export.infra.pillow_codec import PillowImageCodec

__all__ = [
    "MarkdownConverter",
    "PillowImageCodec",
]
