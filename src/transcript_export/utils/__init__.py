"""Utility functions for transcript_export.

This module contains internal utility functions.
"""

from transcript_export.utils.paths import (
    encode_spaces,
    relative_path,
    slugify_title,
    unique_asset_destination,
    unique_path,
)

__all__ = [
    "encode_spaces",
    "relative_path",
    "slugify_title",
    "unique_asset_destination",
    "unique_path",
]
