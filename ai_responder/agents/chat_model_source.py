from __future__ import annotations

from collections.abc import AsyncIterator
import logging
from typing import Any

from langchain_core.language_models.chat_models import BaseChatModel
from openai import APIError, APIStatusError, APITimeoutError, RateLimitError

from ai_responder.agents.base import CompletionSource, CompletionStreamError, Fragment

logger = logging.getLogger(__name__)


class ChatModelCompletionSource(CompletionSource):
    """Completion source backed by a LangChain chat model in streaming mode."""

    def __init__(self, model: BaseChatModel) -> None:
        self._model = model

    async def send(self, prompt: str) -> AsyncIterator[Fragment]:
        logger.debug("opening completion stream", extra={"prompt_length": len(prompt)})
        try:
            async for chunk in self._model.astream(prompt):
                for text in self._extract_text(chunk):
                    yield Fragment(text=text)
        except APITimeoutError as exc:
            raise CompletionStreamError(f"Model provider timed out: {exc}") from exc
        except RateLimitError as exc:
            raise CompletionStreamError(f"Model provider rate limit reached: {exc}") from exc
        except APIStatusError as exc:
            raise CompletionStreamError(f"Model provider returned status {exc.status_code}: {exc.message}") from exc
        except APIError as exc:
            raise CompletionStreamError(str(exc)) from exc

    def _extract_text(self, chunk: Any) -> list[str]:
        chunk_content = getattr(chunk, "content", chunk)
        if isinstance(chunk_content, str):
            return [chunk_content] if chunk_content else []

        if not isinstance(chunk_content, list):
            return []

        parsed: list[str] = []
        for item in chunk_content:
            if isinstance(item, str):
                if item:
                    parsed.append(item)
                continue
            item_type = item.get("type") if isinstance(item, dict) else getattr(item, "type", None)
            if item_type != "text":
                continue
            text = item.get("text", "") if isinstance(item, dict) else getattr(item, "text", "")
            if text:
                parsed.append(text)
        return parsed
