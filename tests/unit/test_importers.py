"""Unit tests for transcript_export importers."""

import io
import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from transcript_export.exceptions import MalformedInputError
from transcript_export.importers.chatgpt import ChatGPTAdapter

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


class TestChatGPTAdapterParsing:
    """Tests for record normalization."""

    def test_source_name(self) -> None:
        assert ChatGPTAdapter().source_name == "chatgpt"

    def test_parse_single_conversation(self) -> None:
        raw = {
            "id": "conv1",
            "title": "Test Chat",
            "create_time": 1704067200,
            "update_time": 1704067300.5,
            "default_model_slug": "gpt-4o",
            "current_node": "node2",
            "mapping": {
                "node1": {
                    "parent": None,
                    "children": ["node2"],
                    "message": {
                        "author": {"role": "user"},
                        "content": {"content_type": "text", "parts": ["Hello"]},
                        "create_time": 1704067200,
                    },
                },
                "node2": {
                    "parent": "node1",
                    "message": {
                        "author": {"role": "assistant"},
                        "content": {"content_type": "text", "parts": ["Hi there!"]},
                        "create_time": 1704067201,
                    },
                },
            },
        }

        record = ChatGPTAdapter().parse_record(raw, sequence=1)

        assert record.sequence == 1
        assert record.conversation_id == "conv1"
        assert record.title == "Test Chat"
        assert record.create_time == 1704067200.0
        assert record.update_time == 1704067300.5
        assert record.model_slug == "gpt-4o"
        assert record.current_node == "node2"
        assert record.mapping["node1"].children == ["node2"]
        assert record.mapping["node2"].parent == "node1"
        message = record.mapping["node2"].message
        assert message is not None
        assert message.role == "assistant"
        assert message.content.parts[0].is_text
        assert message.content.parts[0].text == "Hi there!"

    def test_conversation_id_preferred_over_id(self) -> None:
        record = ChatGPTAdapter().parse_record(
            {"conversation_id": "c-1", "id": "i-1"}, sequence=1
        )
        assert record.conversation_id == "c-1"

    def test_non_object_record_becomes_empty(self) -> None:
        adapter = ChatGPTAdapter()
        for raw in ("just a string", 42, None, ["nested"]):
            record = adapter.parse_record(raw, sequence=7)
            assert record.sequence == 7
            assert record.title is None
            assert record.mapping == {}

    def test_mistyped_fields_are_ignored(self) -> None:
        raw = {
            "title": {"not": "a string"},
            "create_time": True,
            "mapping": ["not", "a", "dict"],
            "current_node": {"id": "x"},
        }
        record = ChatGPTAdapter().parse_record(raw, sequence=1)
        assert record.title is None
        assert record.create_time is None
        assert record.mapping == {}
        assert record.current_node is None

    def test_numeric_string_timestamp(self) -> None:
        record = ChatGPTAdapter().parse_record({"create_time": "1704067200.5"}, sequence=1)
        assert record.create_time == 1704067200.5

    def test_unparseable_timestamp(self) -> None:
        record = ChatGPTAdapter().parse_record({"create_time": "yesterday"}, sequence=1)
        assert record.create_time is None

    def test_message_defaults(self) -> None:
        raw = {
            "mapping": {
                "n": {"message": {"content": {"parts": ["x"]}}},
                "empty": {"message": {}},
                "broken": "not a node",
            }
        }
        record = ChatGPTAdapter().parse_record(raw, sequence=1)
        message = record.mapping["n"].message
        assert message is not None
        assert message.role == "unknown"
        assert message.create_time is None
        assert record.mapping["empty"].message is None
        assert record.mapping["broken"].message is None

    def test_parts_are_normalized(self) -> None:
        raw = {
            "mapping": {
                "n": {
                    "message": {
                        "author": {"role": "user"},
                        "content": {
                            "content_type": "multimodal_text",
                            "parts": [
                                "plain text",
                                {"content_type": "image_asset_pointer", "asset_pointer": "file-service://file-1"},
                                {"content_type": "text", "text": "structured text"},
                                {"asset_pointer": "untyped"},
                                {"content_type": "tether_browsing_display", "result": "..."},
                                17,
                                None,
                            ],
                        },
                    }
                }
            }
        }
        message = ChatGPTAdapter().parse_record(raw, sequence=1).mapping["n"].message
        assert message is not None
        parts = message.content.parts

        assert [p.content_type for p in parts] == [
            "text",
            "image_asset_pointer",
            "text",
            "data",
            "tether_browsing_display",
        ]
        assert parts[0].text == "plain text"
        assert parts[1].asset_pointer == "file-service://file-1"
        assert parts[2].text == "structured text"
        assert message.content.content_type == "multimodal_text"

    def test_raw_text_content(self) -> None:
        raw = {
            "mapping": {
                "n": {"message": {"content": {"content_type": "code", "text": "print(1)"}}},
                "s": {"message": {"content": "a bare string body"}},
            }
        }
        record = ChatGPTAdapter().parse_record(raw, sequence=1)
        code = record.mapping["n"].message
        bare = record.mapping["s"].message
        assert code is not None and bare is not None
        assert code.content.parts == []
        assert code.content.text == "print(1)"
        assert bare.content.text == "a bare string body"


class TestChatGPTAdapterStreaming:
    """Tests for streaming decode of export files."""

    def test_iter_file_fixture(self) -> None:
        records = list(ChatGPTAdapter().iter_file(FIXTURES_DIR / "chatgpt_export.json"))

        assert [r.sequence for r in records] == [1, 2, 3]
        assert records[0].title == "Python Async Programming Help"
        assert records[0].node_count == 7
        assert records[1].title == ""
        assert records[2].current_node is None

    def test_iter_file_is_lazy(self, write_export: Callable[[Any], Path]) -> None:
        path = write_export([{"title": "one"}, {"title": "two"}])

        records = ChatGPTAdapter().iter_file(path)
        first = next(records)

        assert first.title == "one"
        assert next(records).title == "two"
        with pytest.raises(StopIteration):
            next(records)

    def test_floats_are_plain_floats(self, write_export: Callable[[Any], Path]) -> None:
        path = write_export([{"create_time": 1704067200.123}])
        record = next(ChatGPTAdapter().iter_file(path))
        assert isinstance(record.create_time, float)

    def test_non_object_records_keep_position(self, write_export: Callable[[Any], Path]) -> None:
        path = write_export(["oops", {"title": "Real"}, 3])
        records = list(ChatGPTAdapter().iter_file(path))

        assert len(records) == 3
        assert records[0].mapping == {}
        assert records[1].title == "Real"
        assert records[1].sequence == 2

    def test_empty_array(self, write_export: Callable[[Any], Path]) -> None:
        path = write_export([])
        assert list(ChatGPTAdapter().iter_file(path)) == []

    @pytest.mark.parametrize(
        "document",
        [
            '[{"title": "ok"}, {"title": ',
            '{"title": "not an array"}',
            "",
            "not json at all",
        ],
    )
    def test_malformed_file_fails_before_first_record(
        self,
        write_export: Callable[[Any], Path],
        document: str,
    ) -> None:
        path = write_export(document)

        with pytest.raises(MalformedInputError):
            ChatGPTAdapter().iter_file(path)

    def test_iter_stream(self) -> None:
        payload = json.dumps([{"title": "from stream"}]).encode("utf-8")
        records = list(ChatGPTAdapter().iter_stream(io.BytesIO(payload)))
        assert records[0].title == "from stream"

    def test_iter_stream_malformed(self) -> None:
        with pytest.raises(MalformedInputError):
            ChatGPTAdapter().iter_stream(io.BytesIO(b"[1, 2"))
