"""Shared bot context passed to every handler."""

import uuid
from dataclasses import dataclass, field

from ..dialogue import DialogueTracker
from ..models import ConversationRef, Identity, IdentityOverride, InboundMessage
from ..store import DEFAULT_MEMBER_NAME, AnswerStore


@dataclass
class BotContext:
    """
    Process-wide bot state.

    Created once at startup. The stand-up itself is only re-armed by
    AnswerStore.start_standup(); reset() is for the control API.
    """

    store: AnswerStore = field(default_factory=AnswerStore)
    dialogues: DialogueTracker = field(default_factory=DialogueTracker)
    conversation_refs: dict[str, ConversationRef] = field(default_factory=dict)  # member_id -> last seen
    general_ref: ConversationRef | None = None
    identity_overrides: dict[str, IdentityOverride] = field(default_factory=dict)  # conversation_id -> override

    def reset(self) -> None:
        self.store.reset()
        self.dialogues.clear()
        self.conversation_refs.clear()
        self.general_ref = None
        self.identity_overrides.clear()


def emulator_id() -> str:
    return f"emu-{uuid.uuid4().hex[:6]}"


def resolve_identity(ctx: BotContext, message: InboundMessage) -> Identity:
    """Sender identity, honouring the conversation's override."""
    override = ctx.identity_overrides.get(message.conversation_id)
    if override:
        return Identity(member_id=override.member_id, display_name=override.display_name)

    name = (message.sender_name or "").strip() or DEFAULT_MEMBER_NAME
    member_id = (message.sender_id or "").strip() or emulator_id()
    return Identity(member_id=member_id, display_name=name)
