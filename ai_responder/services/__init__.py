"""Service layer orchestrating AI reply streaming into chat messages."""

from ai_responder.services.chat_backend import ChatBackendError, HttpChatBackend, InMemoryChatBackend
from ai_responder.services.flush_throttle import FlushThrottle
from ai_responder.services.responder_service import ResponderService, ResponseAlreadyActiveError
from ai_responder.services.response_streamer import ResponseSession, ResponseState, ResponseStreamer

__all__ = [
    "ChatBackendError",
    "FlushThrottle",
    "HttpChatBackend",
    "InMemoryChatBackend",
    "ResponderService",
    "ResponseAlreadyActiveError",
    "ResponseSession",
    "ResponseState",
    "ResponseStreamer",
]
