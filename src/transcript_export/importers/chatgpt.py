"""ChatGPT import adapter for transcript_export.

This module streams conversations out of a ChatGPT export file
(conversations.json) without loading the whole document.
"""

import math
from collections.abc import Iterator
from decimal import Decimal
from pathlib import Path
from typing import Any, BinaryIO

import ijson
from typing_extensions import override

from transcript_export.exceptions import MalformedInputError
from transcript_export.importers.base import ConversationImportAdapter
from transcript_export.logging import get_logger
from transcript_export.models.conversation import (
    ContentPart,
    ConversationRecord,
    HistoryNode,
    Message,
    MessageContent,
)

__all__ = [
    "ChatGPTAdapter",
]

logger = get_logger(__name__)


class ChatGPTAdapter(ConversationImportAdapter):
    """Adapter for ChatGPT export format (conversations.json).

    The export is a top-level array of conversations, each holding a
    mapping of message nodes linked by parent ids and a pointer to the
    node the visible transcript ends at.

    Export format example:
        [
            {
                "id": "conversation-id",
                "title": "Chat Title",
                "create_time": 1704067200.5,
                "current_node": "node-2",
                "mapping": {
                    "node-1": {"message": null, "parent": null, "children": ["node-2"]},
                    "node-2": {
                        "parent": "node-1",
                        "message": {
                            "author": {"role": "user"},
                            "content": {"content_type": "text", "parts": ["Hello"]},
                            "create_time": 1704067200
                        }
                    }
                }
            }
        ]

    The whole file is checked with a streaming event pass before the
    first record is produced, so a truncated or invalid document fails
    before any output is written.
    """

    @property
    @override
    def source_name(self) -> str:
        return "chatgpt"

    @override
    def iter_file(self, path: Path | str) -> Iterator[ConversationRecord]:
        path = Path(path)
        with path.open("rb") as stream:
            self._validate(stream, path)
        return self._records_from_file(path)

    @override
    def iter_stream(self, stream: BinaryIO) -> Iterator[ConversationRecord]:
        source = getattr(stream, "name", "<stream>")
        start = stream.tell()
        self._validate(stream, source)
        stream.seek(start)
        return self._records(stream, source)

    def _records_from_file(self, path: Path) -> Iterator[ConversationRecord]:
        with path.open("rb") as stream:
            yield from self._records(stream, path)

    def _records(self, stream: BinaryIO, source: Path | str) -> Iterator[ConversationRecord]:
        sequence = 0
        try:
            for raw in ijson.items(stream, "item", use_float=True):
                sequence += 1
                yield self.parse_record(raw, sequence)
        except ijson.JSONError as e:
            raise MalformedInputError(source, str(e)) from e

    def _validate(self, stream: BinaryIO, source: Path | str) -> None:
        """Walk every parse event once, keeping memory flat."""
        try:
            events = ijson.parse(stream)
            first = next(events, None)
            if first is None:
                raise MalformedInputError(source, "document is empty")
            _, event, _ = first
            if event != "start_array":
                raise MalformedInputError(source, "top-level value is not an array")
            for _ in events:
                pass
        except (ijson.JSONError, UnicodeDecodeError) as e:
            raise MalformedInputError(source, str(e)) from e

    @override
    def parse_record(self, raw: Any, sequence: int) -> ConversationRecord:
        if not isinstance(raw, dict):
            logger.warning(
                "non_object_record",
                sequence=sequence,
                record_type=type(raw).__name__,
            )
            return ConversationRecord(sequence=sequence)

        return ConversationRecord(
            sequence=sequence,
            conversation_id=self._as_str(raw.get("conversation_id") or raw.get("id")),
            title=self._as_str(raw.get("title")),
            create_time=self._parse_timestamp(raw.get("create_time")),
            update_time=self._parse_timestamp(raw.get("update_time")),
            model_slug=self._as_str(raw.get("default_model_slug")),
            mapping=self._parse_mapping(raw.get("mapping")),
            current_node=self._as_str(raw.get("current_node")),
        )

    def _parse_mapping(self, raw: Any) -> dict[str, HistoryNode]:
        if not isinstance(raw, dict):
            return {}

        mapping: dict[str, HistoryNode] = {}
        for node_id, node in raw.items():
            if not isinstance(node, dict):
                mapping[node_id] = HistoryNode(node_id=node_id)
                continue

            children = node.get("children")
            mapping[node_id] = HistoryNode(
                node_id=node_id,
                message=self._parse_message(node.get("message")),
                parent=self._as_str(node.get("parent")),
                children=[str(c) for c in children] if isinstance(children, list) else [],
            )
        return mapping

    def _parse_message(self, raw: Any) -> Message | None:
        """Parse a message, treating an empty object like a missing one."""
        if not isinstance(raw, dict) or not raw:
            return None

        author = raw.get("author")
        role = author.get("role") if isinstance(author, dict) else None

        return Message(
            role=role if isinstance(role, str) and role else "unknown",
            create_time=self._parse_timestamp(raw.get("create_time")),
            content=self._parse_content(raw.get("content")),
        )

    def _parse_content(self, raw: Any) -> MessageContent:
        if isinstance(raw, str):
            return MessageContent(text=raw)
        if not isinstance(raw, dict):
            return MessageContent()

        parts = raw.get("parts")
        parsed_parts = []
        if isinstance(parts, list):
            for part in parts:
                parsed = self._parse_part(part)
                if parsed is not None:
                    parsed_parts.append(parsed)

        text = raw.get("text")
        return MessageContent(
            content_type=self._as_str(raw.get("content_type")),
            parts=parsed_parts,
            text=text if isinstance(text, str) else None,
        )

    def _parse_part(self, raw: Any) -> ContentPart | None:
        # Plain string parts are the common case for text messages
        if isinstance(raw, str):
            return ContentPart(content_type="text", text=raw)
        if not isinstance(raw, dict):
            return None

        content_type = raw.get("content_type")
        text = raw.get("text")
        pointer = raw.get("asset_pointer")
        return ContentPart(
            content_type=content_type if isinstance(content_type, str) and content_type else "data",
            text=text if isinstance(text, str) else None,
            asset_pointer=pointer if isinstance(pointer, str) else None,
        )

    def _parse_timestamp(self, value: Any) -> float | None:
        """Parse timestamp to epoch seconds."""
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, (int, float, Decimal)):
            result = float(value)
        elif isinstance(value, str):
            try:
                result = float(value.strip())
            except ValueError:
                return None
        else:
            return None
        return result if math.isfinite(result) else None

    def _as_str(self, value: Any) -> str | None:
        if isinstance(value, str):
            return value
        if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
            return str(value)
        return None
