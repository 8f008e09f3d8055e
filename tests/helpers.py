"""Builders for conversation models used across tests."""

from transcript_export.models.conversation import (
    ContentPart,
    ConversationRecord,
    HistoryNode,
    Message,
    MessageContent,
)


def text_message(role: str, text: str, create_time: float | None = None) -> Message:
    return Message(
        role=role,
        create_time=create_time,
        content=MessageContent(
            content_type="text",
            parts=[ContentPart(content_type="text", text=text)],
        ),
    )


def image_message(pointer: str | None, role: str = "user") -> Message:
    return Message(
        role=role,
        content=MessageContent(
            content_type="multimodal_text",
            parts=[ContentPart(content_type="image_asset_pointer", asset_pointer=pointer)],
        ),
    )


def chain(*messages: Message) -> ConversationRecord:
    """Build a conversation whose nodes form a single parent chain."""
    mapping: dict[str, HistoryNode] = {}
    parent = None
    for index, message in enumerate(messages):
        node_id = f"n{index}"
        mapping[node_id] = HistoryNode(node_id=node_id, message=message, parent=parent)
        parent = node_id
    return ConversationRecord(
        sequence=1,
        title="Sample",
        mapping=mapping,
        current_node=parent,
    )
