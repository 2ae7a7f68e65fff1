"""Shared test utilities and fixtures for ai-responder tests."""

from __future__ import annotations

from collections.abc import AsyncIterator, Sequence
from types import SimpleNamespace

import pytest
import punq

from ai_responder.agents.base import Fragment
from ai_responder.core.settings import Settings


class FakeChatBackend:
    """Chat backend fake that records every outbound call in order."""

    def __init__(self, update_errors: Sequence[Exception] = ()) -> None:
        self.calls: list[tuple[str, str, object]] = []
        self.handlers: dict[str, list] = {}
        self.subscribe_calls = 0
        self.unsubscribe_calls = 0
        self.error_details: list[str] = []
        self._update_errors = list(update_errors)

    async def update_message_text(self, message_id: str, text: str, *, error_detail: str | None = None) -> None:
        if self._update_errors:
            raise self._update_errors.pop(0)
        self.calls.append(("update", message_id, text))
        if error_detail is not None:
            self.error_details.append(error_detail)

    async def send_channel_event(self, channel_id: str, event) -> None:
        self.calls.append(("event", channel_id, dict(event)))

    def subscribe(self, event_name: str, handler) -> None:
        self.subscribe_calls += 1
        self.handlers.setdefault(event_name, []).append(handler)

    def unsubscribe(self, event_name: str, handler) -> None:
        self.unsubscribe_calls += 1
        handlers = self.handlers.get(event_name, [])
        if handler in handlers:
            handlers.remove(handler)

    async def dispatch(self, event_name: str, payload) -> None:
        for handler in list(self.handlers.get(event_name, [])):
            await handler(payload)

    async def aclose(self) -> None:
        return None

    @property
    def updates(self) -> list[str]:
        return [str(payload) for kind, _, payload in self.calls if kind == "update"]

    @property
    def events(self) -> list[dict]:
        return [payload for kind, _, payload in self.calls if kind == "event"]  # type: ignore[misc]


class ScriptedCompletionSource:
    """Completion source replaying a script of fragments, awaited hooks and errors."""

    def __init__(self, steps: Sequence[object]) -> None:
        self._steps = list(steps)
        self.prompts: list[str] = []
        self.closed = False

    async def send(self, prompt: str) -> AsyncIterator[Fragment]:
        self.prompts.append(prompt)
        try:
            for step in self._steps:
                if isinstance(step, BaseException):
                    raise step
                if callable(step):
                    await step()
                    continue
                yield Fragment(text=step)
        finally:
            self.closed = True


class FakeClock:
    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_backend() -> FakeChatBackend:
    return FakeChatBackend()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def test_settings() -> Settings:
    return Settings()


def build_test_request(container: punq.Container):
    """Build a request-shaped object using a real punq container in app state."""

    return SimpleNamespace(app=SimpleNamespace(state=SimpleNamespace(container=container)))


def build_test_container(bindings: dict[object, object]) -> punq.Container:
    """Create a punq container and bind protocol/service keys to test doubles."""

    container = punq.Container()
    for key, value in bindings.items():
        container.register(key, instance=value)
    return container
