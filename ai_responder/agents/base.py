from __future__ import annotations

from dataclasses import dataclass
from typing import AsyncIterator, Protocol


@dataclass(frozen=True)
class Fragment:
    """One incremental chunk of generated text."""

    text: str


class CompletionStreamError(Exception):
    """Raised when the model provider fails while a completion is streaming."""


class CompletionSource(Protocol):
    """Contract for AI sources that stream a single completion as text fragments."""

    def send(self, prompt: str) -> AsyncIterator[Fragment]:
        """Open a completion for ``prompt``; the returned stream is finite and not restartable."""


def build_prompt(system_prompt: str, user_message: str) -> str:
    return f"{system_prompt.strip()}\n\nUser message: {user_message}"
