"""Service layer for transcript_export.

This module exports the export pipeline's services.
"""

from transcript_export.services.asset_resolver import AssetResolver, ConversationAssets
from transcript_export.services.content_renderer import ContentRenderer
from transcript_export.services.emitter import DocumentEmitter, build_pdf_html
from transcript_export.services.history import HistoryLinearizer

__all__ = [
    "AssetResolver",
    "ContentRenderer",
    "ConversationAssets",
    "DocumentEmitter",
    "HistoryLinearizer",
    "build_pdf_html",
]
