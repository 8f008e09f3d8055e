"""Base import adapter for transcript_export.

This module defines the abstract base class for conversation import adapters.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from pathlib import Path
from typing import Any, BinaryIO

from transcript_export.models.conversation import ConversationRecord

__all__ = [
    "ConversationImportAdapter",
]


class ConversationImportAdapter(ABC):
    """Abstract base class for conversation import adapters.

    Import adapters turn a provider-specific export file into a lazy,
    forward-only sequence of ConversationRecord objects.

    Important: Adapters must NOT write output or keep state between
    records. They only decode and normalize.

    Example:
        class MyAdapter(ConversationImportAdapter):
            @property
            def source_name(self) -> str:
                return "my_source"

            def parse_record(self, raw: Any, sequence: int) -> ConversationRecord:
                ...

            def iter_stream(self, stream: BinaryIO) -> Iterator[ConversationRecord]:
                ...
    """

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Return unique identifier for this import source.

        Returns:
            Source identifier string (e.g., "chatgpt")
        """
        ...

    @abstractmethod
    def parse_record(self, raw: Any, sequence: int) -> ConversationRecord:
        """Normalize one decoded record.

        This method must be pure and must not raise for unexpected shapes;
        anything it cannot interpret becomes an empty field.

        Args:
            raw: Decoded JSON value for one stream element
            sequence: 1-based position of the element in the stream

        Returns:
            ConversationRecord
        """
        ...

    @abstractmethod
    def iter_stream(self, stream: BinaryIO) -> Iterator[ConversationRecord]:
        """Decode records lazily from a seekable binary stream.

        Args:
            stream: Binary file stream containing the export

        Returns:
            Iterator over ConversationRecord objects

        Raises:
            MalformedInputError: If the stream cannot be decoded
        """
        ...

    @abstractmethod
    def iter_file(self, path: Path | str) -> Iterator[ConversationRecord]:
        """Decode records lazily from a file path.

        Args:
            path: Path to the export JSON file

        Returns:
            Iterator over ConversationRecord objects

        Raises:
            MalformedInputError: If the file cannot be decoded
        """
        ...
