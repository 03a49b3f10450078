"""Application bootstrap and lifecycle management."""

import os
from typing import Protocol

from .config import resolve_db_path, summarization_enabled
from .digest import DigestSummarizer
from .dispatcher import BotContext, StandupDispatcher
from .gateway import OutboxGateway
from .llm import ILLMProvider, LLMAnswerSummarizer, LLMProvider
from .logging_config import get_logger
from .storage import IStorage, Storage
from .tracker import ITracker, Tracker

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self) -> None:
        """Initialize components in dependency order."""
        ...

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        ...

    async def reset(self) -> None:
        """Reset the stand-up and traces between test runs."""
        ...


class Application:
    """Main application bootstrap."""

    def __init__(self, db_path: str | None = None, summarize: bool | None = None):
        env_db_path = os.getenv("DATABASE_URL") if db_path is None else db_path
        self._db_path = resolve_db_path(env_db_path)
        self._summarize = summarization_enabled() if summarize is None else summarize

        # Components (will be initialized in start())
        self._storage: IStorage | None = None
        self._tracker: ITracker | None = None
        self._llm: ILLMProvider | None = None
        self._context: BotContext | None = None
        self._gateway: OutboxGateway | None = None
        self._dispatcher: StandupDispatcher | None = None

    async def start(self) -> None:
        """Initialize components in dependency order."""
        logger.info("Starting application")

        # 1. Storage (no dependencies)
        self._storage = Storage(self._db_path)
        await self._storage.init()
        logger.info("Storage initialized")

        # 2. Tracker (depends on Storage)
        self._tracker = Tracker(self._storage)

        # 3. LLM (only when summaries are enabled; needs ANTHROPIC_API_KEY)
        answer_summarizer = None
        if self._summarize:
            self._llm = LLMProvider()
            answer_summarizer = LLMAnswerSummarizer(self._llm)
            logger.info("LLM summaries enabled")
        else:
            logger.info("LLM summaries disabled, using deterministic digest lines")

        # 4. Bot context and gateway
        self._context = BotContext()
        self._gateway = OutboxGateway()

        # 5. Dispatcher (depends on all of the above)
        self._dispatcher = StandupDispatcher(
            context=self._context,
            gateway=self._gateway,
            summarizer=DigestSummarizer(answer_summarizer),
            tracker=self._tracker,
        )
        await self._dispatcher.start()
        logger.info("All components initialized successfully")

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        if self._dispatcher:
            await self._dispatcher.stop()
        if self._storage:
            await self._storage.close()
            logger.info("Storage closed")

    async def reset(self) -> None:
        """Reset the stand-up, conversations and traces."""
        if self._dispatcher:
            await self._dispatcher.stop()

        if self._storage:
            await self._storage.clear()
            logger.info("Storage cleared")
        if self._context:
            self._context.reset()
        if self._gateway:
            self._gateway.clear()

        if self._dispatcher:
            await self._dispatcher.start()
            logger.info("Reset complete")

    @property
    def storage(self) -> IStorage:
        """Get storage instance."""
        if not self._storage:
            raise RuntimeError("Application not started")
        return self._storage

    @property
    def dispatcher(self) -> StandupDispatcher:
        """Get dispatcher instance."""
        if not self._dispatcher:
            raise RuntimeError("Application not started")
        return self._dispatcher

    @property
    def gateway(self) -> OutboxGateway:
        """Get gateway instance."""
        if not self._gateway:
            raise RuntimeError("Application not started")
        return self._gateway

    @property
    def context(self) -> BotContext:
        """Get bot context."""
        if not self._context:
            raise RuntimeError("Application not started")
        return self._context
