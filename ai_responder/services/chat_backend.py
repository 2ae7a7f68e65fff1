from __future__ import annotations

import logging
from typing import Any

import httpx

from ai_responder.core.settings import Settings
from ai_responder.services.contracts import ChatBackendProtocol, ChatEventHandler
from ai_responder.services.generation_events import ChannelEvent, StopRequestEvent

logger = logging.getLogger(__name__)


class ChatBackendError(Exception):
    """Raised when a chat backend call fails."""


class ChatEventRegistry:
    """Inbound event handler registry shared by the chat backend implementations."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[ChatEventHandler]] = {}

    def subscribe(self, event_name: str, handler: ChatEventHandler) -> None:
        self._handlers.setdefault(event_name, []).append(handler)

    def unsubscribe(self, event_name: str, handler: ChatEventHandler) -> None:
        handlers = self._handlers.get(event_name)
        if not handlers or handler not in handlers:
            return
        handlers.remove(handler)
        if not handlers:
            del self._handlers[event_name]

    def handler_count(self, event_name: str) -> int:
        return len(self._handlers.get(event_name, []))

    async def dispatch(self, event_name: str, payload: StopRequestEvent) -> None:
        for handler in list(self._handlers.get(event_name, [])):
            try:
                await handler(payload)
            except Exception:
                logger.exception("chat event handler failed", extra={"event_name": event_name})


class InMemoryChatBackend(ChatEventRegistry):
    """Process-local chat backend that records message texts and channel events."""

    def __init__(self) -> None:
        super().__init__()
        self.messages: dict[str, str] = {}
        self.error_details: dict[str, str] = {}
        self.channel_events: dict[str, list[ChannelEvent]] = {}

    async def update_message_text(self, message_id: str, text: str, *, error_detail: str | None = None) -> None:
        self.messages[message_id] = text
        if error_detail is not None:
            self.error_details[message_id] = error_detail

    async def send_channel_event(self, channel_id: str, event: ChannelEvent) -> None:
        self.channel_events.setdefault(channel_id, []).append(event)

    async def aclose(self) -> None:
        return None


class HttpChatBackend(ChatEventRegistry):
    """Chat backend speaking to a chat REST API; inbound events arrive through ``dispatch``."""

    def __init__(
        self,
        base_url: str,
        api_key: str | None = None,
        timeout_seconds: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__()
        headers = {"Authorization": f"Bearer {api_key}"} if api_key else {}
        self._client = client or httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout_seconds,
        )

    async def update_message_text(self, message_id: str, text: str, *, error_detail: str | None = None) -> None:
        fields: dict[str, Any] = {"text": text}
        if error_detail is not None:
            fields["error_detail"] = error_detail
        await self._request("PUT", f"/messages/{message_id}", {"set": fields})

    async def send_channel_event(self, channel_id: str, event: ChannelEvent) -> None:
        await self._request("POST", f"/channels/{channel_id}/event", {"event": dict(event)})

    async def _request(self, method: str, path: str, payload: dict[str, Any]) -> None:
        try:
            response = await self._client.request(method, path, json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise ChatBackendError(
                f"Chat backend returned {exc.response.status_code} for {method} {path}"
            ) from exc
        except httpx.HTTPError as exc:
            raise ChatBackendError(f"Chat backend request {method} {path} failed: {exc}") from exc

    async def aclose(self) -> None:
        await self._client.aclose()


def build_chat_backend(settings: Settings) -> ChatBackendProtocol:
    if settings.chat_backend_use_mock:
        logger.info("using InMemoryChatBackend")
        return InMemoryChatBackend()

    logger.info("using HttpChatBackend", extra={"base_url": settings.chat_backend_base_url})
    return HttpChatBackend(
        base_url=settings.chat_backend_base_url,
        api_key=settings.chat_backend_api_key,
        timeout_seconds=settings.chat_backend_timeout_seconds,
    )
