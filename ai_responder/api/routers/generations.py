import logging

from fastapi import APIRouter, HTTPException, Request, status

from ai_responder.api.schemas.generations import (
    ActiveGenerationsResponse,
    StartGenerationRequest,
    StartGenerationResponse,
    StopGenerationResponse,
)
from ai_responder.dependency_injection import get_container
from ai_responder.services.contracts import ResponderServiceProtocol
from ai_responder.services.responder_service import ResponseAlreadyActiveError

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/generations", tags=["generations"])


@router.post(
    "",
    summary="Start streaming an AI reply into a chat message",
    description="Schedules generation in the background and returns immediately; progress is mirrored into the chat message.",
    response_model=StartGenerationResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def start_generation(payload: StartGenerationRequest, request: Request) -> StartGenerationResponse:
    responder = get_container(request).resolve(ResponderServiceProtocol)
    try:
        streamer = await responder.start_response(
            channel_id=payload.channel_id,
            message_id=payload.message_id,
            user_message=payload.message,
        )
    except ResponseAlreadyActiveError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc

    return StartGenerationResponse(message_id=streamer.message_id)


@router.post(
    "/{message_id}/stop",
    summary="Stop an in-flight AI reply",
    description="Delivers a generation.stop signal; the reply keeps the text streamed so far.",
    response_model=StopGenerationResponse,
)
async def stop_generation(message_id: str, request: Request) -> StopGenerationResponse:
    responder = get_container(request).resolve(ResponderServiceProtocol)
    stopped = await responder.stop_response(message_id)
    if not stopped:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="no active generation for message")
    logger.info("stop signal delivered", extra={"message_id": message_id})
    return StopGenerationResponse(message_id=message_id, stopped=True)


@router.get(
    "",
    summary="List in-flight AI replies",
    response_model=ActiveGenerationsResponse,
)
async def list_generations(request: Request) -> ActiveGenerationsResponse:
    responder = get_container(request).resolve(ResponderServiceProtocol)
    return ActiveGenerationsResponse(message_ids=responder.active_message_ids())
