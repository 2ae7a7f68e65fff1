from __future__ import annotations

import asyncio
import logging

from ai_responder.agents.base import CompletionSource, build_prompt
from ai_responder.agents.factory import build_system_prompt
from ai_responder.core.settings import Settings
from ai_responder.services.contracts import ChatBackendProtocol
from ai_responder.services.flush_throttle import FlushThrottle
from ai_responder.services.generation_events import GENERATION_STOP_EVENT
from ai_responder.services.response_streamer import ResponseStreamer

logger = logging.getLogger(__name__)


class ResponseAlreadyActiveError(Exception):
    """Raised when a reply is requested for a message that is still being generated."""

    def __init__(self, message_id: str) -> None:
        super().__init__(f"A response is already being generated for message {message_id}")
        self.message_id = message_id


class ResponderService:
    """Use-case service that runs one ``ResponseStreamer`` per in-flight chat reply."""

    def __init__(
        self,
        source: CompletionSource,
        backend: ChatBackendProtocol,
        settings: Settings,
    ) -> None:
        self._source = source
        self._backend = backend
        self._settings = settings
        self._system_prompt = build_system_prompt(settings)
        self._active: dict[str, ResponseStreamer] = {}
        self._tasks: dict[ResponseStreamer, asyncio.Task[None]] = {}

    async def start_response(self, *, channel_id: str, message_id: str, user_message: str) -> ResponseStreamer:
        if message_id in self._active:
            raise ResponseAlreadyActiveError(message_id)

        streamer = ResponseStreamer(
            source=self._source,
            backend=self._backend,
            channel_id=channel_id,
            message_id=message_id,
            prompt=build_prompt(self._system_prompt, user_message),
            on_dispose=lambda: self._forget(message_id, streamer),
            throttle=FlushThrottle(interval_seconds=self._settings.responder_flush_interval_seconds),
            error_fallback_text=self._settings.responder_error_fallback_text,
        )
        self._active[message_id] = streamer
        task = asyncio.create_task(streamer.start())
        self._tasks[streamer] = task
        task.add_done_callback(lambda _: self._tasks.pop(streamer, None))
        logger.info(
            "scheduled response",
            extra={"channel_id": channel_id, "message_id": message_id, "active_responses": len(self._active)},
        )
        return streamer

    async def stop_response(self, message_id: str) -> bool:
        if message_id not in self._active:
            return False
        await self._backend.dispatch(GENERATION_STOP_EVENT, {"message_id": message_id})
        return True

    def active_message_ids(self) -> list[str]:
        return list(self._active)

    async def aclose(self) -> None:
        for streamer in list(self._active.values()):
            await streamer.cancel()
        tasks = list(self._tasks.values())
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("responder service closed", extra={"awaited_tasks": len(tasks)})

    def _forget(self, message_id: str, streamer: ResponseStreamer) -> None:
        if self._active.get(message_id) is streamer:
            del self._active[message_id]
