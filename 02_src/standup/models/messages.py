"""Message-related data models."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class ConversationRef:
    """Enough information for a gateway to reach a conversation again."""

    conversation_id: str
    channel: str | None = None
    service_url: str | None = None


@dataclass
class InboundMessage:
    """A text message received from the messaging gateway."""

    conversation_id: str
    sender_id: str
    sender_name: str
    text: str
    channel: str | None = None

    def conversation_ref(self) -> ConversationRef:
        return ConversationRef(
            conversation_id=self.conversation_id,
            channel=self.channel,
        )


@dataclass
class OutboundMessage:
    """A text message sent to a conversation."""

    conversation_id: str
    text: str
    timestamp: datetime


@dataclass
class Identity:
    """Resolved sender of a message."""

    member_id: str
    display_name: str


@dataclass
class IdentityOverride:
    """Substitute identity for one conversation (multi-member testing)."""

    member_id: str
    display_name: str
