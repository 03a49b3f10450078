"""StandupDispatcher: routes inbound messages to commands or the guided dialogue."""

import asyncio
from typing import Protocol

from ..commands import Command, CommandKind, parse_command
from ..dialogue import question_for
from ..digest import DigestSummarizer, format_digest
from ..gateway import IMessagingGateway
from ..logging_config import get_logger
from ..models import (
    ANSWER_FIELDS,
    ConversationRef,
    DialogueSession,
    Identity,
    IdentityOverride,
    InboundMessage,
    MissingMember,
    StandupStatus,
)
from ..tracker import ITracker
from . import messages
from .context import BotContext, emulator_id, resolve_identity

logger = get_logger(__name__)

# Commands that still run once the stand-up is frozen
FROZEN_ALLOWED = frozenset(
    {
        CommandKind.STATUS,
        CommandKind.DIGEST,
        CommandKind.DIGEST_POST,
        CommandKind.HELP,
        CommandKind.WHOAMI,
        CommandKind.AS,
        CommandKind.CLEAR_AS,
        CommandKind.SET_GENERAL,
        CommandKind.CLEAR_GENERAL,
    }
)


class IStandupDispatcher(Protocol):
    """Handles every inbound message of the bot."""

    async def handle_message(self, message: InboundMessage) -> list[str]:
        """Process one message to completion. Return the texts replied to the sender."""
        ...

    async def start(self) -> None:
        """Start accepting messages."""
        ...

    async def stop(self) -> None:
        """Stop accepting messages."""
        ...


class _Turn:
    """Replies of one inbound message, sent to the sender's conversation."""

    def __init__(self, gateway: IMessagingGateway, ref: ConversationRef):
        self._gateway = gateway
        self.ref = ref
        self.replies: list[str] = []

    async def reply(self, text: str) -> None:
        await self._gateway.send(self.ref, text)
        self.replies.append(text)


class StandupDispatcher:
    """Guided stand-up bot: commands first, then the per-member dialogue."""

    def __init__(
        self,
        context: BotContext,
        gateway: IMessagingGateway,
        summarizer: DigestSummarizer | None = None,
        tracker: ITracker | None = None,
    ):
        self._ctx = context
        self._gateway = gateway
        self._summarizer = summarizer or DigestSummarizer()
        self._tracker = tracker
        self._running = False

    @property
    def context(self) -> BotContext:
        return self._ctx

    async def start(self) -> None:
        logger.info("Starting StandupDispatcher")
        self._running = True

    async def stop(self) -> None:
        logger.info("Stopping StandupDispatcher")
        self._running = False

    async def handle_message(self, message: InboundMessage) -> list[str]:
        if not self._running:
            raise RuntimeError("StandupDispatcher not started")

        text = (message.text or "").strip()
        identity = resolve_identity(self._ctx, message)
        ref = message.conversation_ref()
        self._ctx.conversation_refs[identity.member_id] = ref
        turn = _Turn(self._gateway, ref)

        logger.info(
            "Message received from %s: %s",
            identity.member_id,
            text[:100],
            extra={
                "member_id": identity.member_id,
                "conversation_id": message.conversation_id,
            },
        )

        command = parse_command(text)
        frozen = self._ctx.store.get_state().status == StandupStatus.FROZEN

        if frozen and (command is None or command.kind not in FROZEN_ALLOWED):
            await self._discard_session(identity.member_id, reason="frozen")
            notice = (
                messages.START_FROZEN
                if command and command.kind is CommandKind.START
                else messages.FROZEN
            )
            await turn.reply(notice)
            return turn.replies

        if command is not None:
            await self._handle_command(command, identity, message, turn)
            return turn.replies

        session = self._ctx.dialogues.get(identity.member_id)
        if session is not None:
            await self._handle_answer(session, text, identity, turn)

        return turn.replies

    # ------------------------------------------------------------------
    # Commands

    async def _handle_command(
        self,
        command: Command,
        identity: Identity,
        message: InboundMessage,
        turn: _Turn,
    ) -> None:
        handlers = {
            CommandKind.START: self._cmd_start,
            CommandKind.STATUS: self._cmd_status,
            CommandKind.FREEZE: self._cmd_freeze,
            CommandKind.DIGEST: self._cmd_digest,
            CommandKind.DIGEST_POST: self._cmd_digest_post,
            CommandKind.SET_GENERAL: self._cmd_set_general,
            CommandKind.CLEAR_GENERAL: self._cmd_clear_general,
            CommandKind.AS: self._cmd_as,
            CommandKind.WHOAMI: self._cmd_whoami,
            CommandKind.CLEAR_AS: self._cmd_clear_as,
            CommandKind.HELP: self._cmd_help,
        }
        logger.debug("Command %s from %s", command.kind.value, identity.member_id)
        await handlers[command.kind](command, identity, message, turn)

    async def _cmd_start(
        self,
        command: Command,
        identity: Identity,
        message: InboundMessage,
        turn: _Turn,
    ) -> None:
        store = self._ctx.store
        state = store.get_state()

        if state.status == StandupStatus.FROZEN:
            await turn.reply(messages.START_FROZEN)
            return

        if state.status == StandupStatus.IDLE:
            store.start_standup([identity.member_id])
            await self._track(
                "standup_started",
                {"date": state.date, "started_by": identity.member_id},
            )

        store.register_user(identity.member_id, identity.display_name)
        session = self._ctx.dialogues.begin(
            identity.member_id, identity.display_name, state.cycle
        )
        await self._track(
            "session_started",
            {"member_id": identity.member_id, "cycle": session.cycle},
        )

        await turn.reply(messages.GREETING.format(name=identity.display_name))
        await turn.reply(question_for(session))

    async def _cmd_status(
        self,
        command: Command,
        identity: Identity,
        message: InboundMessage,
        turn: _Turn,
    ) -> None:
        state = self._ctx.store.get_state()
        await turn.reply(
            messages.STATUS.format(
                status=state.status.value,
                date=state.date or "—",
                count=len(state.responses),
            )
        )

    async def _cmd_freeze(
        self,
        command: Command,
        identity: Identity,
        message: InboundMessage,
        turn: _Turn,
    ) -> None:
        store = self._ctx.store
        store.freeze_standup()
        missing = store.missing_members_detailed()
        await self._track(
            "standup_frozen",
            {
                "frozen_by": identity.member_id,
                "responses": len(store.get_state().responses),
                "missing": [m.id for m in missing],
            },
        )

        if not missing:
            await turn.reply(messages.FREEZE_COMPLETE)
            return

        await turn.reply(messages.FREEZE_MISSING.format(names=_bold_names(missing)))
        await self._notify_missing(missing)

    async def _cmd_digest(
        self,
        command: Command,
        identity: Identity,
        message: InboundMessage,
        turn: _Turn,
    ) -> None:
        raw = self._raw_digest()
        text = raw if command.full else await self._summarizer.summarize(raw)
        await self._track(
            "digest_generated",
            {"requested_by": identity.member_id, "full": command.full},
        )
        await turn.reply(text)

    async def _cmd_digest_post(
        self,
        command: Command,
        identity: Identity,
        message: InboundMessage,
        turn: _Turn,
    ) -> None:
        general_ref = self._ctx.general_ref
        if general_ref is None:
            await turn.reply(messages.GENERAL_MISSING)
            return

        summary = await self._summarizer.summarize(self._raw_digest())
        await self._gateway.send(general_ref, summary)
        await self._track(
            "digest_posted",
            {
                "requested_by": identity.member_id,
                "conversation_id": general_ref.conversation_id,
            },
        )
        await turn.reply(messages.DIGEST_POSTED)

    async def _cmd_set_general(
        self,
        command: Command,
        identity: Identity,
        message: InboundMessage,
        turn: _Turn,
    ) -> None:
        self._ctx.general_ref = message.conversation_ref()
        await turn.reply(messages.GENERAL_SET)

    async def _cmd_clear_general(
        self,
        command: Command,
        identity: Identity,
        message: InboundMessage,
        turn: _Turn,
    ) -> None:
        self._ctx.general_ref = None
        await turn.reply(messages.GENERAL_CLEARED)

    async def _cmd_as(
        self,
        command: Command,
        identity: Identity,
        message: InboundMessage,
        turn: _Turn,
    ) -> None:
        if not command.args:
            await turn.reply(messages.AS_USAGE)
            return

        name = command.args[0].strip()
        member_id = command.args[1].strip() if len(command.args) > 1 else emulator_id()
        self._ctx.identity_overrides[message.conversation_id] = IdentityOverride(
            member_id=member_id, display_name=name
        )
        await turn.reply(messages.AS_SET.format(name=name, id=member_id))

    async def _cmd_whoami(
        self,
        command: Command,
        identity: Identity,
        message: InboundMessage,
        turn: _Turn,
    ) -> None:
        await turn.reply(
            messages.WHOAMI.format(name=identity.display_name, id=identity.member_id)
        )

    async def _cmd_clear_as(
        self,
        command: Command,
        identity: Identity,
        message: InboundMessage,
        turn: _Turn,
    ) -> None:
        self._ctx.identity_overrides.pop(message.conversation_id, None)
        await turn.reply(messages.AS_CLEARED)

    async def _cmd_help(
        self,
        command: Command,
        identity: Identity,
        message: InboundMessage,
        turn: _Turn,
    ) -> None:
        await turn.reply(messages.HELP)

    # ------------------------------------------------------------------
    # Guided dialogue

    async def _handle_answer(
        self,
        session: DialogueSession,
        text: str,
        identity: Identity,
        turn: _Turn,
    ) -> None:
        state = self._ctx.store.get_state()

        if session.cycle != state.cycle:
            await self._discard_session(identity.member_id, reason="stale")
            await turn.reply(messages.SESSION_EXPIRED)
            return

        if state.status != StandupStatus.COLLECTING:
            await self._discard_session(identity.member_id, reason=state.status.value)
            await turn.reply(messages.FROZEN)
            return

        field_name = session.field_name
        session = self._ctx.dialogues.capture(identity.member_id, text)
        await self._track(
            "answer_captured",
            {"member_id": identity.member_id, "field": field_name},
        )

        if session.is_complete:
            await self._commit(session, identity)
            await turn.reply(messages.COMPLETED.format(name=session.display_name))
            return

        await turn.reply(messages.ACK)
        await turn.reply(question_for(session))

    async def _commit(self, session: DialogueSession, identity: Identity) -> None:
        store = self._ctx.store
        for index, field_name in enumerate(ANSWER_FIELDS, start=1):
            store.record_answer(
                session.member_id,
                index,
                session.answers.get(field_name, ""),
                session.display_name,
            )
        store.register_user(session.member_id, identity.display_name)
        self._ctx.dialogues.discard(session.member_id)
        logger.info(
            "Answers committed for %s",
            session.member_id,
            extra={"member_id": session.member_id, "cycle": session.cycle},
        )
        await self._track("answer_committed", {"member_id": session.member_id})

    async def _discard_session(self, member_id: str, reason: str) -> None:
        session = self._ctx.dialogues.discard(member_id)
        if session is None:
            return
        logger.info(
            "Dialogue of %s discarded (%s)",
            member_id,
            reason,
            extra={"member_id": member_id, "cycle": session.cycle},
        )
        await self._track(
            "session_discarded",
            {"member_id": member_id, "reason": reason, "index": session.index},
        )

    # ------------------------------------------------------------------
    # Helpers

    def _raw_digest(self) -> str:
        store = self._ctx.store
        return format_digest(store.get_state(), names=store.names())

    async def _notify_missing(self, missing: list[MissingMember]) -> None:
        """Remind each missing member in their last conversation, concurrently."""
        targets = [
            (member, self._ctx.conversation_refs[member.id])
            for member in missing
            if member.id in self._ctx.conversation_refs
        ]
        if not targets:
            return

        results = await asyncio.gather(
            *[
                self._gateway.send(ref, messages.FREEZE_REMINDER.format(name=member.name))
                for member, ref in targets
            ],
            return_exceptions=True,
        )

        for (member, ref), result in zip(targets, results):
            if isinstance(result, Exception):
                logger.error(
                    "Failed to notify %s: %s",
                    member.id,
                    result,
                    extra={
                        "member_id": member.id,
                        "conversation_id": ref.conversation_id,
                    },
                )
                await self._track(
                    "notification_failed",
                    {"member_id": member.id, "error": str(result)},
                )
            else:
                await self._track(
                    "member_notified",
                    {"member_id": member.id, "conversation_id": ref.conversation_id},
                )

    async def _track(self, event_type: str, data: dict) -> None:
        if self._tracker is not None:
            await self._tracker.track(event_type=event_type, actor="dispatcher", data=data)


def _bold_names(missing: list[MissingMember]) -> str:
    return ", ".join(f"**{m.name}**" for m in missing)
