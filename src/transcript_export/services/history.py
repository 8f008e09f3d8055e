"""History linearization for transcript_export.

This module reconstructs the visible transcript of a conversation from
its tree of nodes.
"""

from transcript_export.logging import get_logger
from transcript_export.models.conversation import HistoryNode, Message

__all__ = [
    "HistoryLinearizer",
]

logger = get_logger(__name__)


class HistoryLinearizer:
    """Turns a node mapping into an ordered list of messages.

    The visible transcript is the chain of parents from the current leaf
    up to the root. Nodes are looked up by id in the mapping; no node
    holds a reference to another.

    Example:
        linearizer = HistoryLinearizer()
        messages = linearizer.linearize(record.mapping, record.current_node)
    """

    def linearize(
        self,
        mapping: dict[str, HistoryNode],
        current_node: str | None,
    ) -> list[Message]:
        """Reconstruct the ordered messages of a conversation.

        Walks parent links from ``current_node``. If that yields nothing,
        falls back to every node ordered by message timestamp. Nodes
        without a message (structural roots) are dropped.

        Args:
            mapping: Node id to HistoryNode
            current_node: Id of the transcript's last node (may be missing)

        Returns:
            Messages in transcript order; empty if the mapping is empty
        """
        if not mapping:
            return []

        ordered = self._walk_parents(mapping, current_node)

        if not ordered:
            ordered = self._chronological(mapping)
            logger.debug(
                "history_fallback_to_timestamps",
                current_node=current_node,
                node_count=len(mapping),
            )

        return [node.message for node in ordered if node.message is not None]

    def _walk_parents(
        self,
        mapping: dict[str, HistoryNode],
        current_node: str | None,
    ) -> list[HistoryNode]:
        """Collect the root-to-leaf path ending at ``current_node``."""
        path: list[HistoryNode] = []
        limit = len(mapping) + 2
        steps = 0
        node_id = current_node

        while node_id and node_id in mapping:
            node = mapping[node_id]
            path.append(node)
            node_id = node.parent

            steps += 1
            if steps > limit:
                logger.warning(
                    "history_cycle_detected",
                    current_node=current_node,
                    node_count=len(mapping),
                )
                break

        path.reverse()
        return path

    def _chronological(self, mapping: dict[str, HistoryNode]) -> list[HistoryNode]:
        def timestamp(node: HistoryNode) -> float:
            if node.message is None or node.message.create_time is None:
                return 0.0
            return node.message.create_time

        return sorted(mapping.values(), key=timestamp)
