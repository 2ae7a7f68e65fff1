from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
import logging

from ai_responder.agents.base import CompletionSource
from ai_responder.services.contracts import ChatBackendProtocol
from ai_responder.services.flush_throttle import FlushThrottle
from ai_responder.services.generation_events import (
    GENERATION_STOP_EVENT,
    ChannelEvent,
    StopRequestEvent,
    clear_event,
    error_event,
    generating_event,
)

logger = logging.getLogger(__name__)

DEFAULT_ERROR_TEXT = "Error generating the message"


class ResponseState(str, Enum):
    IDLE = "idle"
    GENERATING = "generating"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    ERRORED = "errored"

    @property
    def terminal(self) -> bool:
        return self in _TERMINAL_STATES


_TERMINAL_STATES = frozenset({ResponseState.COMPLETED, ResponseState.CANCELLED, ResponseState.ERRORED})


@dataclass
class ResponseSession:
    """Mutable state of one generated reply, owned by a single ``ResponseStreamer``."""

    channel_id: str
    message_id: str
    text: str = ""
    state: ResponseState = ResponseState.IDLE
    last_flush_at: float | None = None

    @property
    def terminal(self) -> bool:
        return self.state.terminal


class ResponseStreamer:
    """Streams one AI completion into a chat message.

    Fragments are accumulated and pushed to the backend through throttled partial updates.
    A ``generation.stop`` event for the same message cancels the reply at the next fragment
    boundary. Every terminal state converges on :meth:`dispose`, which unsubscribes and runs the
    teardown callback exactly once.

    Terminal states are claimed before their closing signal is emitted (the clear event, or the
    error event plus error text), so a racing stop request or error cannot emit a second one.
    """

    def __init__(
        self,
        *,
        source: CompletionSource,
        backend: ChatBackendProtocol,
        channel_id: str,
        message_id: str,
        prompt: str,
        on_dispose: Callable[[], None] | None = None,
        throttle: FlushThrottle | None = None,
        error_fallback_text: str = DEFAULT_ERROR_TEXT,
    ) -> None:
        self._source = source
        self._backend = backend
        self._prompt = prompt
        self._on_dispose = on_dispose
        self._throttle = throttle or FlushThrottle()
        self._error_fallback_text = error_fallback_text
        self._released = False
        self.session = ResponseSession(channel_id=channel_id, message_id=message_id)

    @property
    def message_id(self) -> str:
        return self.session.message_id

    @property
    def state(self) -> ResponseState:
        return self.session.state

    @property
    def text(self) -> str:
        return self.session.text

    async def start(self) -> None:
        if self.session.state is not ResponseState.IDLE:
            raise RuntimeError(f"response for message {self.message_id} is already {self.session.state.value}")

        self.session.state = ResponseState.GENERATING
        self._backend.subscribe(GENERATION_STOP_EVENT, self._handle_stop)
        logger.info(
            "starting response generation",
            extra={"channel_id": self.session.channel_id, "message_id": self.message_id},
        )
        try:
            await self._backend.send_channel_event(self.session.channel_id, generating_event(self.message_id))
            await self._consume()
            await self._flush()
            if self._transition(ResponseState.COMPLETED):
                logger.info(
                    "response generation completed",
                    extra={"message_id": self.message_id, "text_length": len(self.session.text)},
                )
                await self._send_closing_event(clear_event(self.message_id))
        except Exception as exc:
            logger.exception("response generation failed", extra={"message_id": self.message_id})
            await self._handle_error(exc)
        finally:
            self.dispose()

    def dispose(self) -> None:
        """Release the session; disposing a reply that is still generating cancels it silently."""

        if self._released:
            return
        self._released = True
        self._transition(ResponseState.CANCELLED)

        try:
            self._backend.unsubscribe(GENERATION_STOP_EVENT, self._handle_stop)
        except Exception:
            logger.exception("failed to unsubscribe stop handler", extra={"message_id": self.message_id})

        if self._on_dispose is None:
            return
        try:
            self._on_dispose()
        except Exception:
            logger.exception("response teardown callback failed", extra={"message_id": self.message_id})

    async def _consume(self) -> None:
        stream = self._source.send(self._prompt)
        try:
            async for fragment in stream:
                if self.session.terminal:
                    logger.debug("dropping fragment after termination", extra={"message_id": self.message_id})
                    break
                if not fragment.text:
                    continue
                self.session.text += fragment.text
                if self._throttle.is_due(self.session.last_flush_at):
                    await self._flush()
        finally:
            aclose = getattr(stream, "aclose", None)
            if aclose is not None:
                await aclose()

    async def _flush(self) -> None:
        if self.session.terminal:
            return
        self.session.last_flush_at = self._throttle.now()
        await self._backend.update_message_text(self.message_id, self.session.text)

    async def cancel(self) -> bool:
        """Cancel a running reply, clear its indicator and dispose it; returns False once terminal."""

        if not self._transition(ResponseState.CANCELLED):
            return False

        logger.info("response cancelled", extra={"message_id": self.message_id})
        try:
            await self._send_closing_event(clear_event(self.message_id))
        finally:
            self.dispose()
        return True

    async def _handle_stop(self, event: StopRequestEvent) -> None:
        if event.get("message_id") != self.message_id:
            return
        await self.cancel()

    async def _handle_error(self, error: Exception) -> None:
        if not self._transition(ResponseState.ERRORED):
            return

        try:
            await self._backend.send_channel_event(self.session.channel_id, error_event(self.message_id))
            await self._backend.update_message_text(
                self.message_id,
                str(error) or self._error_fallback_text,
                error_detail=f"{type(error).__name__}: {error}",
            )
        except Exception:
            logger.exception("failed to report response error", extra={"message_id": self.message_id})

    async def _send_closing_event(self, event: ChannelEvent) -> None:
        try:
            await self._backend.send_channel_event(self.session.channel_id, event)
        except Exception:
            logger.exception("failed to send closing generation event", extra={"message_id": self.message_id})

    def _transition(self, state: ResponseState) -> bool:
        if self.session.terminal:
            return False
        self.session.state = state
        return True
