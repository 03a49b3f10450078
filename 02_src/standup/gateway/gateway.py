"""Messaging gateway boundary and in-process outbox implementation."""

from collections import defaultdict
from datetime import datetime, timezone
from typing import Protocol

from ..logging_config import get_logger
from ..models import ConversationRef, OutboundMessage

logger = get_logger(__name__)


class GatewayError(Exception):
    """A message could not be delivered."""


class IMessagingGateway(Protocol):
    """Sends text to a conversation, in reply or proactively."""

    async def send(self, ref: ConversationRef, text: str) -> None:
        """Deliver text to the referenced conversation."""
        ...


class OutboxGateway:
    """Queues outgoing messages per conversation until they are drained."""

    def __init__(self, unreachable: set[str] | None = None):
        self._outbox: dict[str, list[OutboundMessage]] = defaultdict(list)
        self._history: dict[str, list[OutboundMessage]] = defaultdict(list)
        self.unreachable: set[str] = set(unreachable or ())

    async def send(self, ref: ConversationRef, text: str) -> None:
        if ref.conversation_id in self.unreachable:
            raise GatewayError(f"Conversation {ref.conversation_id} is unreachable")

        message = OutboundMessage(
            conversation_id=ref.conversation_id,
            text=text,
            timestamp=datetime.now(timezone.utc),
        )
        self._outbox[ref.conversation_id].append(message)
        self._history[ref.conversation_id].append(message)
        logger.debug("Queued message for %s: %s", ref.conversation_id, text[:50])

    def drain(self, conversation_id: str) -> list[OutboundMessage]:
        """Return and forget pending messages of a conversation."""
        return self._outbox.pop(conversation_id, [])

    def history(self, conversation_id: str) -> list[OutboundMessage]:
        """All messages ever sent to a conversation."""
        return list(self._history.get(conversation_id, []))

    def clear(self) -> None:
        self._outbox.clear()
        self._history.clear()
