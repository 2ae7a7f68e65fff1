from __future__ import annotations

from typing import Literal, TypedDict

GENERATION_UPDATE_EVENT = "generation.update"
GENERATION_CLEAR_EVENT = "generation.clear"
GENERATION_STOP_EVENT = "generation.stop"

GenerationState = Literal["GENERATING", "ERROR"]


class GenerationUpdateEvent(TypedDict):
    type: Literal["generation.update"]
    state: GenerationState
    message_id: str


class GenerationClearEvent(TypedDict):
    type: Literal["generation.clear"]
    message_id: str


ChannelEvent = GenerationUpdateEvent | GenerationClearEvent


class StopRequestEvent(TypedDict):
    message_id: str


def generating_event(message_id: str) -> GenerationUpdateEvent:
    return {"type": GENERATION_UPDATE_EVENT, "state": "GENERATING", "message_id": message_id}


def error_event(message_id: str) -> GenerationUpdateEvent:
    return {"type": GENERATION_UPDATE_EVENT, "state": "ERROR", "message_id": message_id}


def clear_event(message_id: str) -> GenerationClearEvent:
    return {"type": GENERATION_CLEAR_EVENT, "message_id": message_id}
