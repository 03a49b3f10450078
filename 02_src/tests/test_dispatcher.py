"""Tests for StandupDispatcher."""

import pytest

from standup.dialogue import QUESTIONS
from standup.dispatcher import messages, resolve_identity
from standup.models import IdentityOverride, InboundMessage, StandupStatus

ANSWERS = ["shipped X", "ship Y", "none", "no"]


async def _complete(send, user_id="u1", name="Alice", answers=ANSWERS):
    await send("/start", user_id, name)
    for text in answers:
        replies = await send(text, user_id, name)
    return replies


class TestStartCommand:
    """Tests for /start."""

    @pytest.mark.asyncio
    async def test_start_from_idle_opens_standup(self, send, context):
        """Test that the first /start arms the stand-up for its sender."""
        replies = await send("/start")

        state = context.store.get_state()
        assert state.status == StandupStatus.COLLECTING
        assert state.members == ["u1"]
        assert replies == [messages.GREETING.format(name="Alice"), QUESTIONS[0]]
        assert context.dialogues.get("u1").index == 0

    @pytest.mark.asyncio
    async def test_standup_alias(self, send, context):
        await send("/STANDUP")
        assert context.dialogues.has_session("u1")

    @pytest.mark.asyncio
    async def test_second_member_joins_running_standup(self, send, context):
        """Test that a later /start does not reset the cycle."""
        await _complete(send, "u1", "Alice")
        await send("/start", "u2", "Bob")

        state = context.store.get_state()
        assert state.members == ["u1", "u2"]
        assert "u1" in state.responses
        assert context.store.missing_members() == ["u2"]

    @pytest.mark.asyncio
    async def test_start_mid_dialogue_restarts(self, send, context):
        """Test that /start while answering starts over at question 1."""
        await send("/start")
        await send("shipped X")

        replies = await send("/start")

        assert replies[-1] == QUESTIONS[0]
        assert context.dialogues.get("u1").answers == {}

    @pytest.mark.asyncio
    async def test_start_when_frozen_refused(self, send, context):
        await send("/freeze", "lead", "Lead")

        replies = await send("/start")

        assert replies == [messages.START_FROZEN]
        assert not context.dialogues.has_session("u1")


class TestGuidedDialogue:
    """Tests for answering the questions."""

    @pytest.mark.asyncio
    async def test_each_answer_acknowledged_then_next_question(self, send):
        await send("/start")

        for i in range(3):
            replies = await send(ANSWERS[i])
            assert replies == [messages.ACK, QUESTIONS[i + 1]]

    @pytest.mark.asyncio
    async def test_last_answer_commits(self, send, context):
        """Test that four answers produce one complete Answer record."""
        replies = await _complete(send)

        assert replies == [messages.COMPLETED.format(name="Alice")]
        answer = context.store.get_state().responses["u1"]
        assert (answer.yesterday, answer.today, answer.blockers, answer.other) == tuple(
            ANSWERS
        )
        assert answer.display_name == "Alice"
        assert not context.dialogues.has_session("u1")

    @pytest.mark.asyncio
    async def test_nothing_committed_before_last_answer(self, send, context):
        await send("/start")
        for text in ANSWERS[:3]:
            await send(text)

        assert context.store.get_state().responses == {}

    @pytest.mark.asyncio
    async def test_display_name_from_session_start(self, send, context):
        """Test that a name change mid-dialogue does not affect the record."""
        await send("/start", "u1", "Alice")
        for text in ANSWERS:
            await send(text, "u1", "Alicia")

        assert context.store.get_state().responses["u1"].display_name == "Alice"
        assert context.store.display_name("u1") == "Alice"

    @pytest.mark.asyncio
    async def test_answers_stored_verbatim(self, send, context):
        await send("/start")
        for text in ["Yes, shipped X", "ship Y", "None", "no"]:
            await send(text)

        assert context.store.get_state().responses["u1"].yesterday == "Yes, shipped X"

    @pytest.mark.asyncio
    async def test_freeform_without_session_ignored(self, send, context):
        """Test that chatter outside a dialogue gets no reply."""
        await send("/start", "u2", "Bob")

        assert await send("hello there") == []
        assert context.store.get_state().responses == {}

    @pytest.mark.asyncio
    async def test_commands_take_precedence_mid_dialogue(self, send, context):
        """Test that a command is never captured as an answer."""
        await send("/start")
        await send("shipped X")

        replies = await send("/status")

        assert replies == ["Status: collecting | Date: {} | Responses: 0".format(
            context.store.get_state().date
        )]
        session = context.dialogues.get("u1")
        assert session.index == 1
        assert "today" not in session.answers

    @pytest.mark.asyncio
    async def test_help_mid_dialogue_is_command(self, send, context):
        await send("/start")

        assert await send("help") == [messages.HELP]
        assert context.dialogues.get("u1").index == 0

    @pytest.mark.asyncio
    async def test_freeze_mid_dialogue_discards_session(self, send, context):
        """Test that partial answers are dropped once collection is frozen."""
        await send("/start", "u1", "Alice")
        await send("shipped X", "u1", "Alice")
        await send("/freeze", "lead", "Lead")

        replies = await send("ship Y", "u1", "Alice")

        assert replies == [messages.FROZEN]
        assert not context.dialogues.has_session("u1")
        assert context.store.get_state().responses == {}

    @pytest.mark.asyncio
    async def test_stale_session_after_restart(self, send, context):
        """Test that a session from an earlier cycle is discarded."""
        await send("/start")
        context.store.start_standup(["u1"])

        replies = await send("shipped X")

        assert replies == [messages.SESSION_EXPIRED]
        assert not context.dialogues.has_session("u1")


class TestStatusAndFreeze:
    """Tests for /status and /freeze."""

    @pytest.mark.asyncio
    async def test_status_idle(self, send):
        assert await send("/status") == ["Status: idle | Date: — | Responses: 0"]

    @pytest.mark.asyncio
    async def test_freeze_everyone_answered(self, send, context):
        await _complete(send)

        replies = await send("/freeze")

        assert replies == [messages.FREEZE_COMPLETE]
        assert context.store.get_state().status == StandupStatus.FROZEN

    @pytest.mark.asyncio
    async def test_freeze_lists_and_notifies_missing(self, send, context, gateway):
        """Test that missing members are listed and reminded proactively."""
        await _complete(send, "u1", "Alice")
        await send("/start", "u2", "Bob")

        replies = await send("/freeze", "lead", "Lead")

        assert replies == [messages.FREEZE_MISSING.format(names="**Bob**")]
        reminders = [m.text for m in gateway.history("conv-u2")]
        assert reminders[-1] == messages.FREEZE_REMINDER.format(name="Bob")
        assert [m.id for m in context.store.missing_members_detailed()] == ["u2"]

    @pytest.mark.asyncio
    async def test_notification_failure_is_isolated(
        self, send, context, gateway, storage
    ):
        """Test that one unreachable member does not stop the freeze."""
        await send("/start", "u1", "Alice")
        await send("/start", "u2", "Bob")
        gateway.unreachable.add("conv-u1")

        replies = await send("/freeze", "lead", "Lead")

        assert replies == [messages.FREEZE_MISSING.format(names="**Alice**, **Bob**")]
        assert context.store.get_state().status == StandupStatus.FROZEN
        assert gateway.history("conv-u2")[-1].text == messages.FREEZE_REMINDER.format(
            name="Bob"
        )
        failed = await storage.get_trace_events(event_types=["notification_failed"])
        assert [e.data["member_id"] for e in failed] == ["u1"]

    @pytest.mark.asyncio
    async def test_answers_ignored_after_freeze(self, send, context):
        await _complete(send)
        await send("/freeze")

        replies = await send("late answer")

        assert replies == [messages.FROZEN]
        assert context.store.get_state().responses["u1"].yesterday == "shipped X"

    @pytest.mark.asyncio
    async def test_read_only_commands_allowed_when_frozen(self, send):
        await send("/start")
        await send("/freeze")

        replies = await send("/status")
        assert replies[0].startswith("Status: frozen")

    @pytest.mark.asyncio
    async def test_freeze_twice_gets_frozen_notice(self, send):
        await send("/freeze")
        assert await send("/freeze") == [messages.FROZEN]


class TestDigestCommands:
    """Tests for /digest, /setgeneral and /digestpost."""

    @pytest.mark.asyncio
    async def test_digest_full_is_raw(self, send):
        """Test the worked example through the whole bot."""
        await _complete(send)

        (text,) = await send("/digest full")

        lines = text.splitlines()
        assert "- Alice: none" in lines
        assert "- Alice: ship Y" in lines
        assert lines.index("### ⚠️ Blockers") < lines.index("### ✅ Today")

    @pytest.mark.asyncio
    async def test_digest_is_summarized(self, send):
        """Test that /digest runs the summarization pass."""
        await _complete(send)

        (text,) = await send("/digest")

        assert "- **Alice** — Blocker: none." in text.splitlines()
        assert "- **Alice** ship Y." in text.splitlines()

    @pytest.mark.asyncio
    async def test_digest_names_missing_members(self, send):
        await _complete(send, "u1", "Alice")
        await send("/start", "u2", "Bob")

        (text,) = await send("/digest")

        assert text.splitlines()[-1] == "> ⚠️ No answer from: **Bob**"

    @pytest.mark.asyncio
    async def test_multiline_answers_kept_whole(self, send, context):
        """Test that a multi-line answer survives both digest forms."""
        answers = ["did a\nsame line", "ship Y", "none", "no"]
        await _complete(send, "u1", "Alice", answers)
        await _complete(send, "u2", "Bob", answers)

        assert context.store.get_state().responses["u1"].yesterday == "did a\nsame line"

        (raw,) = await send("/digest full")
        assert "- Alice: did a same line" in raw.splitlines()
        assert "- Bob: did a same line" in raw.splitlines()
        assert raw.count("same line") == 2

        (summary,) = await send("/digest")
        assert "- **Alice** did a same line." in summary.splitlines()
        assert "- **Bob** did a same line." in summary.splitlines()

    @pytest.mark.asyncio
    async def test_digestpost_without_general(self, send):
        assert await send("/digestpost") == [messages.GENERAL_MISSING]

    @pytest.mark.asyncio
    async def test_digestpost_to_general(self, send, gateway, context):
        """Test that the digest goes to the saved general conversation."""
        assert await send("/setgeneral", conversation_id="general") == [
            messages.GENERAL_SET
        ]
        await _complete(send)

        replies = await send("/digestpost")

        assert replies == [messages.DIGEST_POSTED]
        posted = gateway.history("general")[-1].text
        assert posted.startswith("## 📋 Stand-up — ")
        assert "- **Alice** ship Y." in posted.splitlines()

    @pytest.mark.asyncio
    async def test_cleargeneral(self, send, context):
        await send("/setgeneral", conversation_id="general")

        assert await send("/cleargeneral") == [messages.GENERAL_CLEARED]
        assert context.general_ref is None


class TestIdentityCommands:
    """Tests for /as, /whoami and /clearas."""

    @pytest.mark.asyncio
    async def test_as_overrides_identity_for_conversation(self, send, context):
        """Test that one chat can act as several members."""
        await send("/as Bob bob-1", conversation_id="emu")

        replies = await send("/whoami", conversation_id="emu")
        assert replies == [messages.WHOAMI.format(name="Bob", id="bob-1")]

        await send("/start", conversation_id="emu")
        assert context.dialogues.has_session("bob-1")
        assert context.store.get_state().members == ["bob-1"]

    @pytest.mark.asyncio
    async def test_as_without_id_generates_one(self, send, context):
        await send("/as Bob", conversation_id="emu")

        override = context.identity_overrides["emu"]
        assert override.display_name == "Bob"
        assert override.member_id.startswith("emu-")

    @pytest.mark.asyncio
    async def test_as_usage(self, send, context):
        assert await send("/as") == [messages.AS_USAGE]
        assert context.identity_overrides == {}

    @pytest.mark.asyncio
    async def test_clearas(self, send, context):
        await send("/as Bob bob-1", conversation_id="emu")

        assert await send("/clearas", conversation_id="emu") == [messages.AS_CLEARED]
        replies = await send("/whoami", conversation_id="emu")
        assert replies == [messages.WHOAMI.format(name="Alice", id="u1")]


class TestResolveIdentity:
    """Tests for resolve_identity()."""

    def test_sender_identity(self, context):
        message = InboundMessage("c1", " u1 ", " Alice ", "hi")
        identity = resolve_identity(context, message)
        assert (identity.member_id, identity.display_name) == ("u1", "Alice")

    def test_blank_sender_fallbacks(self, context):
        identity = resolve_identity(context, InboundMessage("c1", "", "", "hi"))
        assert identity.display_name == "Member"
        assert identity.member_id.startswith("emu-")

    def test_override_wins(self, context):
        context.identity_overrides["c1"] = IdentityOverride("x", "Xena")
        identity = resolve_identity(context, InboundMessage("c1", "u1", "Alice", "hi"))
        assert identity.member_id == "x"


class TestDispatcherLifecycle:
    """Tests for start/stop and tracing."""

    @pytest.mark.asyncio
    async def test_not_started_raises(self, dispatcher, make_message):
        await dispatcher.stop()

        with pytest.raises(RuntimeError, match="not started"):
            await dispatcher.handle_message(make_message("/status"))

    @pytest.mark.asyncio
    async def test_flow_is_traced(self, send, storage):
        await _complete(send)
        await send("/freeze")

        events = await storage.get_trace_events(actor="dispatcher", limit=100)
        event_types = {e.event_type for e in events}
        assert {
            "standup_started",
            "session_started",
            "answer_captured",
            "answer_committed",
            "standup_frozen",
        } <= event_types

    @pytest.mark.asyncio
    async def test_replies_go_through_gateway(self, send, gateway):
        replies = await send("/start")
        assert [m.text for m in gateway.drain("conv-u1")] == replies
