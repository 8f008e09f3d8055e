"""Public models for transcript_export.

This module exports the conversation records and run options.
"""

from transcript_export.models.conversation import (
    ContentPart,
    ConversationRecord,
    HistoryNode,
    Message,
    MessageContent,
)
from transcript_export.models.options import (
    AttachmentStrategy,
    ExportMode,
    ExportOptions,
    OutputFormat,
)

__all__ = [
    "AttachmentStrategy",
    "ContentPart",
    "ConversationRecord",
    "ExportMode",
    "ExportOptions",
    "HistoryNode",
    "Message",
    "MessageContent",
    "OutputFormat",
]
