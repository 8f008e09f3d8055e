"""Markdown rendering of conversations for transcript_export."""

from datetime import UTC, datetime
from pathlib import Path

from transcript_export.logging import get_logger
from transcript_export.models.conversation import (
    ContentPart,
    ConversationRecord,
    Message,
    MessageContent,
)
from transcript_export.models.options import AttachmentStrategy, ExportOptions
from transcript_export.services.asset_resolver import (
    AssetResolver,
    ConversationAssets,
    pointer_basename,
)
from transcript_export.services.history import HistoryLinearizer
from transcript_export.utils.paths import encode_spaces, relative_path

__all__ = [
    "EMPTY_MESSAGE_PLACEHOLDER",
    "NO_TRANSCRIPT_PLACEHOLDER",
    "POINTER_MISSING_PLACEHOLDER",
    "ContentRenderer",
    "format_timestamp",
]

logger = get_logger(__name__)

NO_TRANSCRIPT_PLACEHOLDER = "_No transcript was available for this conversation._"
EMPTY_MESSAGE_PLACEHOLDER = "_No visible content in this message._"
POINTER_MISSING_PLACEHOLDER = "_Image pointer missing_"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_timestamp(value: float | None) -> str | None:
    """Render epoch seconds as ``YYYY-MM-DD HH:MM:SS`` in UTC."""
    if value is None:
        return None
    try:
        return datetime.fromtimestamp(value, tz=UTC).strftime(TIMESTAMP_FORMAT)
    except (OverflowError, OSError, ValueError):
        return None


class ContentRenderer:
    """Service building the Markdown transcript of a conversation.

    Renders a title, a metadata list and one section per message of the
    linearized history. Image parts are resolved through the
    AssetResolver and embedded with paths relative to the transcript.

    Example:
        renderer = ContentRenderer(options)
        assets = ConversationAssets(target_path)
        markdown = renderer.render_conversation(record, target_path, assets)
    """

    def __init__(
        self,
        options: ExportOptions,
        resolver: AssetResolver | None = None,
        linearizer: HistoryLinearizer | None = None,
    ) -> None:
        """Initialize renderer.

        Args:
            options: Run options (asset directory, strategy, thumbnail width)
            resolver: Attachment resolver (defaults to a Pillow-backed one)
            linearizer: History linearizer
        """
        self._options = options
        self._resolver = resolver or AssetResolver()
        self._linearizer = linearizer or HistoryLinearizer()

    def render_conversation(
        self,
        record: ConversationRecord,
        target_path: Path,
        assets: ConversationAssets,
    ) -> str:
        """Render one conversation as Markdown.

        Args:
            record: Conversation to render
            target_path: Path the Markdown file will be written to
            assets: Attachment state for this conversation

        Returns:
            Markdown document ending with a newline
        """
        sections = [f"# {record.display_title}"]

        metadata = self._metadata(record)
        if metadata:
            sections.append("\n".join(metadata))

        messages = self._linearizer.linearize(record.mapping, record.current_node)

        if not messages:
            sections.append(NO_TRANSCRIPT_PLACEHOLDER)
        else:
            for message in messages:
                sections.append(self.render_message(message, target_path, assets))

        logger.debug(
            "conversation_rendered",
            sequence=record.sequence,
            node_count=record.node_count,
            message_count=len(messages),
        )
        return "\n\n".join(section for section in sections if section) + "\n"

    def render_message(
        self,
        message: Message,
        target_path: Path,
        assets: ConversationAssets,
    ) -> str:
        """Render a message heading and body."""
        role = message.role[:1].upper() + message.role[1:]
        timestamp = format_timestamp(message.create_time)
        heading = f"## {role} ({timestamp})" if timestamp else f"## {role}"

        body = self.render_content(message.content, target_path, assets)
        return f"{heading}\n\n{body or EMPTY_MESSAGE_PLACEHOLDER}"

    def render_content(
        self,
        content: MessageContent,
        target_path: Path,
        assets: ConversationAssets,
    ) -> str:
        """Render the parts of a message, falling back to its raw text."""
        fragments = [self._render_part(part, target_path, assets) for part in content.parts]
        fragments = [fragment for fragment in fragments if fragment.strip()]

        if not fragments and content.text:
            fragments = [content.text.strip()]

        return "\n\n".join(fragment for fragment in fragments if fragment).strip()

    def _render_part(
        self,
        part: ContentPart,
        target_path: Path,
        assets: ConversationAssets,
    ) -> str:
        if part.is_text:
            return (part.text or "").strip()
        if part.is_image:
            return self._render_image(part, target_path, assets)
        return f"_Unsupported {part.content_type} part omitted_"

    def _render_image(
        self,
        part: ContentPart,
        target_path: Path,
        assets: ConversationAssets,
    ) -> str:
        pointer = part.asset_pointer
        if not pointer:
            return POINTER_MISSING_PLACEHOLDER

        label = f"Image {pointer_basename(pointer)}"
        resolved = self._resolver.resolve(pointer, self._options.asset_directory)

        full_path: Path | None = None
        if resolved is not None:
            if self._options.attachment_strategy == AttachmentStrategy.COPY:
                full_path = self._resolver.copy_to_assets(resolved, assets) or resolved
            else:
                full_path = resolved

        if full_path is None:
            return f"![{label}]({encode_spaces(pointer)})"

        full_display = encode_spaces(relative_path(target_path, full_path))

        thumbnail = None
        if self._options.thumbnail_width > 0:
            thumbnail = self._resolver.make_thumbnail(
                full_path, assets, self._options.thumbnail_width
            )

        if thumbnail is not None:
            thumb_display = encode_spaces(relative_path(target_path, thumbnail))
            return f"[![{label}]({thumb_display})]({full_display})"

        return f"![{label}]({full_display})"

    def _metadata(self, record: ConversationRecord) -> list[str]:
        metadata: list[str] = []

        if record.conversation_id:
            metadata.append(f"- **Conversation ID:** {record.conversation_id}")

        created = format_timestamp(record.create_time)
        if created:
            metadata.append(f"- **Created:** {created}")

        updated = format_timestamp(record.update_time)
        if updated:
            metadata.append(f"- **Updated:** {updated}")

        if record.model_slug:
            metadata.append(f"- **Model:** {record.model_slug}")

        return metadata
