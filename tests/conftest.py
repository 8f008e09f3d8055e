"""Shared test fixtures for transcript_export.

This module provides pytest fixtures used across all tests.
"""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from PIL import Image

from transcript_export.models.options import ExportOptions


# Filesystem fixtures
@pytest.fixture
def export_dir(tmp_path: Path) -> Path:
    """Directory holding the export file and its attachments."""
    directory = tmp_path / "export"
    directory.mkdir()
    return directory


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Empty output directory."""
    directory = tmp_path / "out"
    directory.mkdir()
    return directory


@pytest.fixture
def make_image() -> Callable[..., Path]:
    """Factory writing a solid-color image file."""

    def _make(
        path: Path,
        size: tuple[int, int] = (64, 32),
        color: tuple[int, int, int] = (200, 30, 30),
    ) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        Image.new("RGB", size, color).save(path)
        return path

    return _make


@pytest.fixture
def write_export(export_dir: Path) -> Callable[[Any], Path]:
    """Factory writing a conversations.json into the export directory."""

    def _write(data: Any, name: str = "conversations.json") -> Path:
        path = export_dir / name
        if isinstance(data, str):
            path.write_text(data, encoding="utf-8")
        else:
            path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def options(export_dir: Path) -> ExportOptions:
    """Default options with thumbnails disabled."""
    return ExportOptions(asset_directory=export_dir, thumbnail_width=0)


# Sample data fixtures
@pytest.fixture
def hello_conversation() -> dict[str, Any]:
    """Raw single-message conversation."""
    return {
        "title": "Hello",
        "mapping": {
            "a": {
                "message": {
                    "author": {"role": "user"},
                    "content": {"content_type": "text", "parts": ["Hi"]},
                },
                "parent": None,
            }
        },
        "current_node": "a",
    }
