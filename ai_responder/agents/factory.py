from __future__ import annotations

import logging
from pathlib import Path

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from langchain_openai import ChatOpenAI

from ai_responder.agents.base import CompletionSource
from ai_responder.agents.chat_model_source import ChatModelCompletionSource
from ai_responder.core.settings import Settings

logger = logging.getLogger(__name__)

_MOCK_MESSAGE_DELIMITER = "\n\n--- message ---\n\n"

_FORMATTING_INSTRUCTIONS = """

Response formatting policy:
- Replies are rendered inside a chat message bubble; prefer short paragraphs and bullet lists.
- Use fenced code blocks with a language tag for any code.
- Do not open with a greeting or restate the question.
"""


def _load_mock_messages(messages_file: str) -> list[str]:
    path = Path(messages_file)
    raw_content = path.read_text(encoding="utf-8")
    parsed_messages = [chunk.strip() for chunk in raw_content.split(_MOCK_MESSAGE_DELIMITER)]
    messages = [message for message in parsed_messages if message]
    if not messages:
        raise ValueError(
            f"No mock messages found in {path}. Use delimiter {_MOCK_MESSAGE_DELIMITER!r} between messages."
        )
    return messages


def _build_chat_model(settings: Settings) -> BaseChatModel:
    if settings.main_agent_use_mock:
        fake_responses = _load_mock_messages(messages_file=settings.main_agent_mock_messages_file)
        logger.info("using FakeListChatModel completion source", extra={"responses_count": len(fake_responses)})
        return FakeListChatModel(responses=fake_responses, sleep=settings.main_agent_mock_sleep_seconds)

    logger.info("using model-provider completion source", extra={"model_alias": settings.main_agent_model})
    return ChatOpenAI(
        model=settings.main_agent_model,
        base_url=settings.main_agent_model_provider_base_url,
        api_key=settings.main_agent_model_provider_api_key,
        temperature=settings.main_agent_temperature,
        streaming=True,
    )


def build_system_prompt(settings: Settings) -> str:
    return "\n".join(
        [
            settings.responder_system_prompt.strip(),
            _FORMATTING_INSTRUCTIONS.strip(),
        ]
    )


def build_completion_source(settings: Settings) -> CompletionSource:
    """Create the completion source with a real or fake chat model backend."""

    return ChatModelCompletionSource(model=_build_chat_model(settings))
