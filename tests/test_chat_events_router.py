from __future__ import annotations

import pytest

from ai_responder.api.routers import chat_events as chat_events_router
from ai_responder.api.schemas.generations import ChatWebhookEvent
from ai_responder.services.chat_backend import InMemoryChatBackend
from ai_responder.services.contracts import ChatBackendProtocol
from ai_responder.services.generation_events import GENERATION_STOP_EVENT
from tests.conftest import build_test_container, build_test_request


@pytest.mark.asyncio
async def test_stop_webhook_is_dispatched_to_subscribers() -> None:
    backend = InMemoryChatBackend()
    received: list[dict] = []

    async def handler(payload) -> None:
        received.append(payload)

    backend.subscribe(GENERATION_STOP_EVENT, handler)
    request = build_test_request(build_test_container({ChatBackendProtocol: backend}))

    response = await chat_events_router.receive_chat_event(
        payload=ChatWebhookEvent(type="generation.stop", message_id="msg-1"),
        request=request,
    )

    assert response.accepted is True
    assert received == [{"message_id": "msg-1"}]


@pytest.mark.asyncio
async def test_unknown_webhook_events_are_ignored() -> None:
    backend = InMemoryChatBackend()
    received: list[dict] = []

    async def handler(payload) -> None:
        received.append(payload)

    backend.subscribe("message.new", handler)
    request = build_test_request(build_test_container({ChatBackendProtocol: backend}))

    response = await chat_events_router.receive_chat_event(
        payload=ChatWebhookEvent(type="message.new", message_id="msg-1"),
        request=request,
    )

    assert response.accepted is False
    assert received == []
