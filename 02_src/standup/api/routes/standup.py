"""Stand-up inspection routes."""

from datetime import datetime

from fastapi import APIRouter
from pydantic import BaseModel

from ...app import Application
from ...digest import format_digest


class AnswerResponse(BaseModel):
    """Recorded answer of one member."""

    member_id: str
    display_name: str | None
    yesterday: str | None
    today: str | None
    blockers: str | None
    other: str | None
    submitted_at: datetime | None


class StandupResponse(BaseModel):
    """Current stand-up snapshot."""

    date: str
    status: str
    members: list[str]
    missing: list[str]
    responses: list[AnswerResponse]


class DigestResponse(BaseModel):
    """Raw digest text."""

    text: str


def create_standup_router(app: Application) -> APIRouter:
    """Create stand-up router."""
    router = APIRouter(prefix="/api/standup", tags=["standup"])

    @router.get("", response_model=StandupResponse)
    async def get_standup() -> dict:
        """Current stand-up state."""
        store = app.context.store
        state = store.get_state()
        return {
            "date": state.date,
            "status": state.status.value,
            "members": list(state.members),
            "missing": store.missing_members(),
            "responses": [
                {
                    "member_id": member_id,
                    "display_name": answer.display_name,
                    "yesterday": answer.yesterday,
                    "today": answer.today,
                    "blockers": answer.blockers,
                    "other": answer.other,
                    "submitted_at": answer.submitted_at,
                }
                for member_id, answer in state.responses.items()
            ],
        }

    @router.get("/digest", response_model=DigestResponse)
    async def get_digest() -> dict:
        """Raw digest, without LLM summaries."""
        store = app.context.store
        return {"text": format_digest(store.get_state(), names=store.names())}

    return router
