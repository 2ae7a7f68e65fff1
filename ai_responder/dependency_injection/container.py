from __future__ import annotations

import punq
from fastapi import Request

from ai_responder.agents.base import CompletionSource
from ai_responder.agents.factory import build_completion_source
from ai_responder.core.settings import Settings
from ai_responder.services.chat_backend import build_chat_backend
from ai_responder.services.contracts import ChatBackendProtocol, ResponderServiceProtocol
from ai_responder.services.responder_service import ResponderService


def build_container(settings: Settings) -> punq.Container:
    container = punq.Container()
    container.register(Settings, instance=settings)

    container.register(
        CompletionSource,
        factory=lambda: build_completion_source(settings),
        scope=punq.Scope.singleton,
    )
    container.register(
        ChatBackendProtocol,
        factory=lambda: build_chat_backend(settings),
        scope=punq.Scope.singleton,
    )
    container.register(ResponderServiceProtocol, factory=ResponderService, scope=punq.Scope.singleton)

    return container


def get_container(request: Request) -> punq.Container:
    return request.app.state.container
