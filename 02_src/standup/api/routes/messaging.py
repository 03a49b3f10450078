"""Messaging API routes (webhook of the messaging gateway)."""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from ...app import Application
from ...models import InboundMessage


class MessageRequest(BaseModel):
    """Request model for an inbound chat message."""

    conversation_id: str
    user_id: str = ""
    user_name: str = ""
    text: str
    channel: str | None = None


class MessageResponse(BaseModel):
    """Messages sent back to the conversation during the turn."""

    replies: list[str]


class OutboxResponse(BaseModel):
    """Pending messages of a conversation."""

    conversation_id: str
    messages: list[str]


def create_messaging_router(app: Application) -> APIRouter:
    """Create messaging router."""
    router = APIRouter(prefix="/api", tags=["messaging"])

    @router.post("/messages", response_model=MessageResponse)
    async def send_message(request: MessageRequest) -> dict:
        """Hand a message to the dispatcher and return the replies."""
        try:
            await app.dispatcher.handle_message(
                InboundMessage(
                    conversation_id=request.conversation_id,
                    sender_id=request.user_id,
                    sender_name=request.user_name,
                    text=request.text,
                    channel=request.channel,
                )
            )
            replies = app.gateway.drain(request.conversation_id)
            return {"replies": [m.text for m in replies]}
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    @router.get(
        "/conversations/{conversation_id}/outbox", response_model=OutboxResponse
    )
    async def get_outbox(conversation_id: str) -> dict:
        """Fetch (and clear) proactive messages waiting for a conversation."""
        pending = app.gateway.drain(conversation_id)
        return {
            "conversation_id": conversation_id,
            "messages": [m.text for m in pending],
        }

    return router
