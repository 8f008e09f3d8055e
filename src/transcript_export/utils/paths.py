"""Path and filename helpers for transcript_export.

This module derives collision-free output names and the relative path
forms embedded in rendered transcripts.
"""

from pathlib import Path

from slugify import slugify

__all__ = [
    "SLUG_MAX_LENGTH",
    "encode_spaces",
    "relative_path",
    "slugify_title",
    "unique_asset_destination",
    "unique_path",
]

SLUG_MAX_LENGTH = 120


def slugify_title(title: str | None, sequence: int) -> str:
    """Build a filesystem-safe stem from a conversation title.

    Args:
        title: Conversation title (may be blank or contain only symbols)
        sequence: Stream position, used when the title yields nothing

    Returns:
        Lowercase ASCII slug of at most 120 characters
    """
    slug = slugify(title or "", max_length=SLUG_MAX_LENGTH)
    return slug or f"conversation-{sequence}"


def unique_path(directory: Path, stem: str, extension: str) -> Path:
    """Return ``stem.ext``, or ``stem-1.ext``, ``stem-2.ext``... if taken.

    The returned path does not exist at return time. Nothing is reserved,
    so a concurrent writer could still claim it.
    """
    suffix = extension if extension.startswith(".") else f".{extension}"
    candidate = directory / f"{stem}{suffix}"
    counter = 1
    while candidate.exists():
        candidate = directory / f"{stem}-{counter}{suffix}"
        counter += 1
    return candidate


def unique_asset_destination(directory: Path, filename: str) -> Path:
    """Return a free path for ``filename`` inside ``directory`` (``name-N.ext`` scheme)."""
    destination = directory / filename
    if not destination.exists():
        return destination

    name = Path(filename).stem
    extension = Path(filename).suffix
    counter = 1
    while True:
        destination = directory / f"{name}-{counter}{extension}"
        if not destination.exists():
            return destination
        counter += 1


def relative_path(from_file: Path, to_file: Path) -> str:
    """Path of ``to_file`` relative to the directory containing ``from_file``.

    Strips the common prefix of both resolved paths, climbs one ``..`` per
    remaining component of the source directory, then descends to the
    target. Segments are joined with ``/`` so the result is usable as a
    Markdown link on every platform.

    Returns:
        Relative path, or the target's base name when the two paths share
        no root (e.g. different drives) or nothing remains
    """
    from_parts = list(Path(from_file).parent.resolve().parts)
    to_parts = list(Path(to_file).resolve().parts)

    if not from_parts or not to_parts or from_parts[0] != to_parts[0]:
        return Path(to_file).name

    while from_parts and to_parts and from_parts[0] == to_parts[0]:
        from_parts.pop(0)
        to_parts.pop(0)

    segments = [".."] * len(from_parts) + to_parts
    return "/".join(segments) if segments else Path(to_file).name


def encode_spaces(path: str) -> str:
    """Percent-encode spaces so a path survives as a Markdown link target."""
    return path.replace(" ", "%20")
