from fastapi import APIRouter, Request

from ai_responder.dependency_injection import get_container
from ai_responder.services.contracts import ResponderServiceProtocol

router = APIRouter(tags=["health"])


@router.get("/healthz")
def healthz(request: Request) -> dict[str, object]:
    responder = get_container(request).resolve(ResponderServiceProtocol)
    return {"status": "ok", "active_responses": len(responder.active_message_ids())}
