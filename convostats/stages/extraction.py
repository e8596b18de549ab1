"""
Message Extractor.

Flattens the conversation -> mapping -> node -> message -> content -> parts
tree into an ordered list of message texts.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

logger = logging.getLogger(__name__)


def _get_dict(container: Any, key: str) -> Optional[Dict[str, Any]]:
    """Return container[key] if container is a dict and the value is a dict."""
    if not isinstance(container, dict):
        return None
    value = container.get(key)
    return value if isinstance(value, dict) else None


def extract_parts(node: Any) -> Optional[List[str]]:
    """
    Look up node["message"]["content"]["parts"].

    Returns None when any level is missing, null or of the wrong type, or
    when parts is not a list made entirely of strings.
    """
    message = _get_dict(node, "message")
    content = _get_dict(message, "content")
    if content is None:
        return None

    parts = content.get("parts")
    if not isinstance(parts, list):
        return None
    if not all(isinstance(part, str) for part in parts):
        return None
    return parts


@dataclass
class ExtractionStats:
    """Counters describing what the extractor kept and skipped."""
    conversations: int = 0
    conversations_skipped: int = 0
    nodes: int = 0
    nodes_skipped: int = 0
    messages: int = 0


class MessageExtractor:
    """
    Extracts every string part from a list of conversations.

    Malformed conversations and nodes contribute nothing; they are
    logged at DEBUG level and counted, never raised.
    """

    def __init__(self):
        self.stats = ExtractionStats()

    def extract(self, conversations: Iterable[Dict[str, Any]]) -> List[str]:
        """
        Collect message texts in conversation order, then mapping order.

        Args:
            conversations: Parsed conversation objects

        Returns:
            Ordered list of message texts
        """
        self.stats = ExtractionStats()
        messages: List[str] = []

        for index, conversation in enumerate(conversations):
            self.stats.conversations += 1
            mapping = _get_dict(conversation, "mapping")
            if mapping is None:
                logger.debug(f"Conversation {index} has no usable mapping, skipping")
                self.stats.conversations_skipped += 1
                continue

            for node_id, node in mapping.items():
                self.stats.nodes += 1
                parts = extract_parts(node)
                if parts is None:
                    logger.debug(f"Node {node_id} in conversation {index} has no text parts")
                    self.stats.nodes_skipped += 1
                    continue
                messages.extend(parts)

        self.stats.messages = len(messages)
        logger.info(
            f"Extracted {len(messages)} messages from {self.stats.conversations} conversations "
            f"({self.stats.conversations_skipped} conversations, "
            f"{self.stats.nodes_skipped} nodes skipped)"
        )
        return messages


def extract_messages(conversations: Iterable[Dict[str, Any]]) -> List[str]:
    return MessageExtractor().extract(conversations)
