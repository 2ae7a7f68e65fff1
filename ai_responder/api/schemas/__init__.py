from ai_responder.api.schemas.generations import (
    ActiveGenerationsResponse,
    ChatWebhookEvent,
    ChatWebhookResponse,
    StartGenerationRequest,
    StartGenerationResponse,
    StopGenerationResponse,
)

__all__ = [
    "ActiveGenerationsResponse",
    "ChatWebhookEvent",
    "ChatWebhookResponse",
    "StartGenerationRequest",
    "StartGenerationResponse",
    "StopGenerationResponse",
]
