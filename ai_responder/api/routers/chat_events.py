import logging

from fastapi import APIRouter, Request

from ai_responder.api.schemas.generations import ChatWebhookEvent, ChatWebhookResponse
from ai_responder.dependency_injection import get_container
from ai_responder.services.contracts import ChatBackendProtocol
from ai_responder.services.generation_events import GENERATION_STOP_EVENT

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/chat-events", tags=["chat-events"])

_HANDLED_EVENTS = frozenset({GENERATION_STOP_EVENT})


@router.post(
    "",
    summary="Receive inbound chat webhook events",
    description="Forwards supported chat events, such as generation.stop, to the subscribed reply streamers.",
    response_model=ChatWebhookResponse,
)
async def receive_chat_event(payload: ChatWebhookEvent, request: Request) -> ChatWebhookResponse:
    if payload.type not in _HANDLED_EVENTS:
        logger.debug("ignoring chat event", extra={"event_type": payload.type})
        return ChatWebhookResponse(accepted=False)

    backend = get_container(request).resolve(ChatBackendProtocol)
    await backend.dispatch(payload.type, {"message_id": payload.message_id})
    return ChatWebhookResponse(accepted=True)
