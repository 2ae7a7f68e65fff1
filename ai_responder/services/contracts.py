from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Protocol

from ai_responder.services.generation_events import ChannelEvent, StopRequestEvent

if TYPE_CHECKING:
    from ai_responder.services.response_streamer import ResponseStreamer

ChatEventHandler = Callable[[StopRequestEvent], Awaitable[None]]


class ChatBackendProtocol(Protocol):
    """Chat transport used to mirror generation progress into a channel message."""

    async def update_message_text(self, message_id: str, text: str, *, error_detail: str | None = None) -> None:
        """Replace the full visible text of ``message_id``, attaching ``error_detail`` when the reply failed."""

    async def send_channel_event(self, channel_id: str, event: ChannelEvent) -> None:
        """Broadcast a generation indicator event to everyone watching ``channel_id``."""

    def subscribe(self, event_name: str, handler: ChatEventHandler) -> None:
        """Register ``handler`` for inbound events named ``event_name``."""

    def unsubscribe(self, event_name: str, handler: ChatEventHandler) -> None:
        """Remove a handler registration; unknown handlers are ignored."""

    async def dispatch(self, event_name: str, payload: StopRequestEvent) -> None:
        """Deliver an inbound event to the handlers registered for it."""

    async def aclose(self) -> None:
        """Release transport resources during application shutdown."""


class ResponderServiceProtocol(Protocol):
    """Use-case contract for starting and stopping AI replies in chat channels."""

    async def start_response(self, *, channel_id: str, message_id: str, user_message: str) -> ResponseStreamer:
        """Start streaming a reply into ``message_id`` and return its streamer."""

    async def stop_response(self, message_id: str) -> bool:
        """Request cancellation of the active reply for ``message_id``."""

    def active_message_ids(self) -> list[str]:
        """Return message ids with a reply still in flight."""

    async def aclose(self) -> None:
        """Cancel every in-flight reply and await its task during application shutdown."""
