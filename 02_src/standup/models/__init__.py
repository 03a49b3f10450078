"""Core data models for the stand-up bot."""

from .dialogue import ANSWER_FIELDS, DialogueSession
from .messages import (
    ConversationRef,
    Identity,
    IdentityOverride,
    InboundMessage,
    OutboundMessage,
)
from .standup import Answer, MissingMember, StandupState, StandupStatus
from .tracing import TraceEvent

__all__ = [
    # Stand-up
    "StandupStatus",
    "Answer",
    "StandupState",
    "MissingMember",
    # Dialogue
    "ANSWER_FIELDS",
    "DialogueSession",
    # Messages
    "ConversationRef",
    "InboundMessage",
    "OutboundMessage",
    "Identity",
    "IdentityOverride",
    # Tracing
    "TraceEvent",
]
