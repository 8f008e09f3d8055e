"""Import adapters for transcript_export.

This module exports the import adapter base class and the ChatGPT adapter.
"""

from transcript_export.importers.base import ConversationImportAdapter
from transcript_export.importers.chatgpt import ChatGPTAdapter

__all__ = [
    "ChatGPTAdapter",
    "ConversationImportAdapter",
]
