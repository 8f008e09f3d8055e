"""Conversation models for transcript_export.

These frozen Pydantic models mirror the shape of a ChatGPT export record.
They are built defensively by the import adapter: absent or mistyped
fields become None or empty values rather than validation errors.
"""

from pydantic import BaseModel, Field

__all__ = [
    "ContentPart",
    "ConversationRecord",
    "HistoryNode",
    "Message",
    "MessageContent",
]

TEXT_PART = "text"
IMAGE_PART = "image_asset_pointer"


class ContentPart(BaseModel, frozen=True):
    """One fragment of a message body.

    Attributes:
        content_type: Part tag ("text", "image_asset_pointer" or anything else)
        text: Text payload for text parts
        asset_pointer: Opaque pointer used to locate an attachment file
    """

    content_type: str
    text: str | None = None
    asset_pointer: str | None = None

    @property
    def is_text(self) -> bool:
        return self.content_type == TEXT_PART

    @property
    def is_image(self) -> bool:
        return self.content_type == IMAGE_PART


class MessageContent(BaseModel, frozen=True):
    """Message body: a list of parts with a raw text fallback."""

    content_type: str | None = None
    parts: list[ContentPart] = Field(default_factory=list)
    text: str | None = None


class Message(BaseModel, frozen=True):
    """Single authored message inside a conversation tree."""

    role: str = "unknown"
    create_time: float | None = None
    content: MessageContent = Field(default_factory=MessageContent)


class HistoryNode(BaseModel, frozen=True):
    """Node of the conversation tree.

    Nodes refer to each other by id only. The parent id is a key into
    the owning mapping and may point at a node that does not exist.
    """

    node_id: str
    message: Message | None = None
    parent: str | None = None
    children: list[str] = Field(default_factory=list)


class ConversationRecord(BaseModel, frozen=True):
    """One exported conversation.

    Attributes:
        sequence: 1-based position of the record in the export stream
        conversation_id: Provider conversation identifier
        title: Conversation title as exported (may be blank)
        create_time: Creation timestamp in epoch seconds
        update_time: Last update timestamp in epoch seconds
        model_slug: Default model identifier
        mapping: Node id to HistoryNode
        current_node: Id of the leaf the visible transcript ends at
    """

    sequence: int = Field(default=0, ge=0)
    conversation_id: str | None = None
    title: str | None = None
    create_time: float | None = None
    update_time: float | None = None
    model_slug: str | None = None
    mapping: dict[str, HistoryNode] = Field(default_factory=dict)
    current_node: str | None = None

    @property
    def display_title(self) -> str:
        """Trimmed title, or a numbered placeholder when blank."""
        title = (self.title or "").strip()
        return title if title else f"Conversation {self.sequence}"

    @property
    def node_count(self) -> int:
        return len(self.mapping)
