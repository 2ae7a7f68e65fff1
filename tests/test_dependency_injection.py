from __future__ import annotations

from ai_responder.agents.base import CompletionSource
from ai_responder.agents.chat_model_source import ChatModelCompletionSource
from ai_responder.core.settings import Settings
from ai_responder.dependency_injection import build_container
from ai_responder.services.chat_backend import InMemoryChatBackend
from ai_responder.services.contracts import ChatBackendProtocol, ResponderServiceProtocol
from ai_responder.services.responder_service import ResponderService


def _mock_settings(tmp_path) -> Settings:
    messages_file = tmp_path / "messages.md"
    messages_file.write_text("Mocked reply", encoding="utf-8")
    return Settings(
        MAIN_AGENT_USE_MOCK=True,
        MAIN_AGENT_MOCK_MESSAGES_FILE=str(messages_file),
        CHAT_BACKEND_USE_MOCK=True,
    )


def test_container_resolves_singleton_services(tmp_path) -> None:
    container = build_container(_mock_settings(tmp_path))

    assert container.resolve(CompletionSource) is container.resolve(CompletionSource)
    assert container.resolve(ChatBackendProtocol) is container.resolve(ChatBackendProtocol)
    assert container.resolve(ResponderServiceProtocol) is container.resolve(ResponderServiceProtocol)


def test_container_wires_mock_collaborators(tmp_path) -> None:
    container = build_container(_mock_settings(tmp_path))

    assert isinstance(container.resolve(CompletionSource), ChatModelCompletionSource)
    assert isinstance(container.resolve(ChatBackendProtocol), InMemoryChatBackend)
    assert isinstance(container.resolve(ResponderServiceProtocol), ResponderService)
