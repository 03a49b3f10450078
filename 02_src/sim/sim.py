"""SIM implementation - scripted team stand-up for testing."""

import asyncio
import random
from typing import Protocol

import httpx

from standup.logging_config import get_logger

logger = get_logger(__name__)

# One conversation per virtual member; /as makes each act as its own identity
VIRTUAL_MEMBERS = [
    {
        "conversation_id": "sim-conv-alice",
        "user_id": "sim-alice",
        "name": "Alice",
        "answers": [
            "Finished the login page",
            "Wire the login page to the API",
            "None",
            "No",
        ],
    },
    {
        "conversation_id": "sim-conv-bob",
        "user_id": "sim-bob",
        "name": "Bob",
        "answers": [
            "Reviewed Alice's PR",
            "Fix the flaky CI job",
            "Waiting for staging credentials",
            "Yes, a quick sync with Ops",
        ],
    },
    {
        "conversation_id": "sim-conv-charlie",
        "user_id": "sim-charlie",
        "name": "Charlie",
        # leaves after the second answer, shows up as missing on freeze
        "answers": ["Wrote the release notes", "Prepare the demo"],
    },
]


class ISim(Protocol):
    """Generate test traffic."""

    async def start(self) -> None:
        """Start the scripted scenario."""
        ...

    async def stop(self) -> None:
        """Stop the scenario."""
        ...


class Sim:
    """Drives virtual members through a stand-up over the HTTP API."""

    def __init__(
        self,
        api_url: str = "http://localhost:8000",
        members: list[dict] | None = None,
        delay_range: tuple[float, float] = (0.5, 1.5),
    ):
        self._api_url = api_url
        self._members = members or VIRTUAL_MEMBERS
        self._delay_range = delay_range
        self._running = False
        self._task: asyncio.Task | None = None
        self._client: httpx.AsyncClient | None = None

    async def start(self) -> None:
        """Start the scripted scenario."""
        if self._running:
            return

        self._running = True
        self._client = httpx.AsyncClient()

        # Start background task
        self._task = asyncio.create_task(self._run_scenario())

    async def stop(self) -> None:
        """Stop the scenario."""
        self._running = False

        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass

        if self._client:
            await self._client.aclose()
            self._client = None

    async def _run_scenario(self) -> None:
        try:
            # Every member takes an identity and starts the stand-up
            for member in self._members:
                await self._send(member, f"/as {member['name']} {member['user_id']}")
                await self._send(member, "/start")

            # Answers arrive interleaved, one question round at a time
            rounds = max(len(m["answers"]) for m in self._members)
            for i in range(rounds):
                for member in self._members:
                    if not self._running:
                        return
                    if i < len(member["answers"]):
                        await self._send(member, member["answers"][i])
                        await asyncio.sleep(random.uniform(*self._delay_range))

            lead = self._members[0]
            await self._send(lead, "/freeze")
            await self._send(lead, "/digest")

        except asyncio.CancelledError:
            pass
        except Exception as e:
            logger.error("SIM scenario error: %s", e)
        finally:
            self._running = False

    async def _send(self, member: dict, text: str) -> list[str]:
        """Post one message as a member and return the bot replies."""
        if not self._client:
            return []

        try:
            response = await self._client.post(
                f"{self._api_url}/api/messages",
                json={
                    "conversation_id": member["conversation_id"],
                    "user_id": member["user_id"],
                    "user_name": member["name"],
                    "text": text,
                },
                timeout=30.0,
            )
        except httpx.HTTPError as e:
            logger.error("SIM: Failed to send message: %s", e)
            return []

        if response.status_code != 200:
            logger.error("SIM: Error sending message: %s", response.status_code)
            return []

        replies = response.json().get("replies", [])
        logger.info("SIM: %s -> %s", member["name"], text)
        for reply in replies:
            logger.info("SIM: Reply: %s", reply)
        return replies
