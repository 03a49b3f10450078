"""Tests for OutboxGateway."""

import pytest

from standup.gateway import GatewayError, OutboxGateway
from standup.models import ConversationRef


class TestOutboxGateway:
    """Tests for OutboxGateway."""

    @pytest.mark.asyncio
    async def test_send_and_drain(self, gateway):
        """Test that drain returns pending messages once."""
        await gateway.send(ConversationRef("c1"), "hello")
        await gateway.send(ConversationRef("c1"), "again")

        assert [m.text for m in gateway.drain("c1")] == ["hello", "again"]
        assert gateway.drain("c1") == []

    @pytest.mark.asyncio
    async def test_history_survives_drain(self, gateway):
        await gateway.send(ConversationRef("c1"), "hello")
        gateway.drain("c1")

        assert [m.text for m in gateway.history("c1")] == ["hello"]

    @pytest.mark.asyncio
    async def test_conversations_are_separate(self, gateway):
        await gateway.send(ConversationRef("c1"), "one")
        await gateway.send(ConversationRef("c2"), "two")

        assert [m.text for m in gateway.drain("c2")] == ["two"]
        assert [m.text for m in gateway.history("c1")] == ["one"]

    @pytest.mark.asyncio
    async def test_unreachable_conversation_raises(self):
        gateway = OutboxGateway(unreachable={"gone"})

        with pytest.raises(GatewayError, match="gone"):
            await gateway.send(ConversationRef("gone"), "hello")
        assert gateway.history("gone") == []

    @pytest.mark.asyncio
    async def test_clear(self, gateway):
        await gateway.send(ConversationRef("c1"), "hello")
        gateway.clear()

        assert gateway.drain("c1") == []
        assert gateway.history("c1") == []
