"""Attachment resolution for transcript_export.

This module locates exported attachment files from asset pointers,
copies them next to a transcript and generates thumbnails.
"""

import glob
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from transcript_export.exceptions import AssetCopyError, MissingAssetError, ThumbnailError
from transcript_export.infra.pillow_codec import PillowImageCodec
from transcript_export.interfaces.image import ImageCodecInterface
from transcript_export.logging import get_logger
from transcript_export.utils.paths import unique_asset_destination

__all__ = [
    "THUMBNAIL_FOLDER",
    "AssetResolver",
    "ConversationAssets",
    "pointer_basename",
]

logger = get_logger(__name__)

THUMBNAIL_FOLDER = "thumbnails"


def pointer_basename(pointer: str) -> str:
    """Last path segment of an asset pointer.

    ``file-service://file-abc123`` becomes ``file-abc123``.
    """
    return pointer.rstrip("/").rsplit("/", 1)[-1]


@dataclass
class ConversationAssets:
    """Attachment state for one conversation's export.

    Holds the lazily created asset folder and the copy and thumbnail
    caches (absolute source path -> absolute destination path). A new
    instance is created per conversation so nothing leaks between
    conversations or runs.
    """

    target_path: Path
    copied: dict[Path, Path] = field(default_factory=dict)
    thumbnails: dict[Path, Path] = field(default_factory=dict)
    directory: Path | None = None

    @property
    def created(self) -> bool:
        return self.directory is not None

    def ensure_directory(self) -> Path:
        """Create ``<stem>_assets`` next to the transcript on first use.

        If a file (not a directory) already holds that name, ``_1``,
        ``_2``... suffixes are tried.

        Raises:
            OSError: If the directory cannot be created
        """
        if self.directory is not None and self.directory.is_dir():
            return self.directory

        base = self.target_path.parent / f"{self.target_path.stem}_assets"
        candidate = base
        counter = 1
        while candidate.exists() and not candidate.is_dir():
            candidate = base.with_name(f"{base.name}_{counter}")
            counter += 1

        candidate.mkdir(parents=True, exist_ok=True)
        self.directory = candidate
        return candidate


class AssetResolver:
    """Service for resolving, copying and thumbnailing attachments.

    Failures never propagate: a pointer that cannot be resolved, a copy
    that fails or an image that cannot be decoded are logged and reported
    as None so the caller can degrade the rendered output.

    Example:
        resolver = AssetResolver()
        assets = ConversationAssets(target_path=Path("out/hello.md"))
        source = resolver.resolve("file-service://file-abc", Path("export"))
        if source:
            copy = resolver.copy_to_assets(source, assets)
    """

    def __init__(self, image_codec: ImageCodecInterface | None = None) -> None:
        """Initialize resolver.

        Args:
            image_codec: Codec used for thumbnails (defaults to Pillow)
        """
        self._codec = image_codec or PillowImageCodec()

    def find(self, pointer: str, asset_directory: Path) -> Path:
        """Locate the file an asset pointer refers to.

        Matches files named ``<basename(pointer)><anything>`` directly
        inside ``asset_directory``. When several files match, the
        lexicographically smallest name wins.

        Raises:
            MissingAssetError: If the directory is missing or nothing matches
        """
        basename = pointer_basename(pointer)
        if not basename or not asset_directory.is_dir():
            raise MissingAssetError(pointer, asset_directory)

        matches = sorted(
            (p for p in asset_directory.glob(glob.escape(basename) + "*") if p.is_file()),
            key=lambda p: p.name,
        )
        if not matches:
            raise MissingAssetError(pointer, asset_directory)

        return matches[0].resolve()

    def resolve(self, pointer: str, asset_directory: Path) -> Path | None:
        """Like find(), returning None instead of raising."""
        try:
            return self.find(pointer, asset_directory)
        except MissingAssetError as e:
            logger.debug("asset_unresolved", pointer=pointer, reason=str(e))
            return None

    def copy(self, source: Path, assets: ConversationAssets) -> Path:
        """Copy ``source`` into the conversation's asset folder.

        A source copied earlier for the same conversation is not copied
        again as long as its copy still exists.

        Raises:
            AssetCopyError: If the folder or the copy cannot be written
        """
        cached = assets.copied.get(source)
        if cached is not None and cached.exists():
            return cached

        try:
            directory = assets.ensure_directory()
            destination = unique_asset_destination(directory, source.name)
            shutil.copy2(source, destination)
        except OSError as e:
            raise AssetCopyError(source, str(e)) from e

        assets.copied[source] = destination
        logger.debug("asset_copied", source=str(source), destination=str(destination))
        return destination

    def copy_to_assets(self, source: Path, assets: ConversationAssets) -> Path | None:
        """Like copy(), returning None instead of raising."""
        try:
            return self.copy(source, assets)
        except AssetCopyError as e:
            logger.warning("asset_copy_failed", source=str(source), error=str(e))
            return None

    def make_thumbnail(
        self,
        source: Path,
        assets: ConversationAssets,
        max_width: int,
    ) -> Path | None:
        """Write a thumbnail of ``source`` no wider than ``max_width``.

        Nothing is created when ``max_width`` is 0 or the source is gone.

        Returns:
            Thumbnail path, or None if disabled or generation failed
        """
        if max_width <= 0:
            return None

        cached = assets.thumbnails.get(source)
        if cached is not None and cached.exists():
            return cached

        if not source.exists():
            return None

        try:
            directory = assets.ensure_directory() / THUMBNAIL_FOLDER
            directory.mkdir(parents=True, exist_ok=True)
            destination = unique_asset_destination(directory, source.name)
            self._codec.scale_down(source, destination, max_width)
        except (OSError, ThumbnailError) as e:
            logger.warning("thumbnail_failed", source=str(source), error=str(e))
            return None

        assets.thumbnails[source] = destination
        return destination
