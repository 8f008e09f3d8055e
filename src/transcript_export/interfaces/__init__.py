"""Interface contracts for transcript_export.

This module exports the Protocol-based interfaces of the external
collaborators the export pipeline depends on.
"""

from transcript_export.interfaces.document import DocumentRendererInterface
from transcript_export.interfaces.image import ImageCodecInterface
from transcript_export.interfaces.markup import MarkupConverterInterface

__all__ = [
    "DocumentRendererInterface",
    "ImageCodecInterface",
    "MarkupConverterInterface",
]
