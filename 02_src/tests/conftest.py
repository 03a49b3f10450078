"""Pytest configuration and fixtures."""

import sys
from pathlib import Path
from unittest.mock import AsyncMock, Mock

import pytest
import pytest_asyncio

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest_asyncio.fixture
async def storage():
    """Create in-memory storage for testing."""
    from standup.storage import Storage

    st = Storage(":memory:")
    await st.init()
    yield st
    await st.close()


@pytest.fixture
def tracker(storage):
    """Create Tracker with storage."""
    from standup.tracker import Tracker

    return Tracker(storage=storage)


@pytest.fixture
def mock_llm():
    """Create mock LLM provider."""
    llm = Mock()
    llm.complete = AsyncMock(return_value="Test response")
    return llm


@pytest.fixture
def store():
    """Create an empty answer store."""
    from standup.store import AnswerStore

    return AnswerStore()


@pytest.fixture
def context():
    """Create a fresh bot context."""
    from standup.dispatcher import BotContext

    return BotContext()


@pytest.fixture
def gateway():
    """Create an outbox gateway."""
    from standup.gateway import OutboxGateway

    return OutboxGateway()


@pytest_asyncio.fixture
async def dispatcher(context, gateway, tracker):
    """Create a started dispatcher with deterministic digests."""
    from standup.digest import DigestSummarizer
    from standup.dispatcher import StandupDispatcher

    d = StandupDispatcher(
        context=context,
        gateway=gateway,
        summarizer=DigestSummarizer(),
        tracker=tracker,
    )
    await d.start()
    yield d
    await d.stop()


@pytest.fixture
def make_message():
    """Build InboundMessages; conversation defaults to one per user."""
    from standup.models import InboundMessage

    def _make(text, user_id="u1", name="Alice", conversation_id=None):
        return InboundMessage(
            conversation_id=conversation_id or f"conv-{user_id}",
            sender_id=user_id,
            sender_name=name,
            text=text,
        )

    return _make


@pytest.fixture
def send(dispatcher, make_message):
    """Send a text to the dispatcher and return the replies."""

    async def _send(text, user_id="u1", name="Alice", conversation_id=None):
        return await dispatcher.handle_message(
            make_message(text, user_id, name, conversation_id)
        )

    return _send
