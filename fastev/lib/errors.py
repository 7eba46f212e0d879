"""Exceptions raised by the event emitter."""

from __future__ import annotations

from typing import Any


class EmitterError(Exception):
    """Base class for all emitter errors."""


class InvalidHandler(EmitterError, TypeError):
    """A listener was registered that cannot be called."""

    def __init__(self, handler: Any) -> None:
        super().__init__(f"Handler not a function: {handler!r}")
        self.handler = handler


class TooManyArguments(EmitterError, ValueError):
    """An event was emitted with more positional arguments than supported."""

    def __init__(self, event: str, count: int) -> None:
        super().__init__(f"Too many arguments ({count}) for event {event!r}")
        self.event = event
        self.count = count


class UnhandledError(EmitterError):
    """Raised by the default 'error' handler when nothing is listening.

    The emitted value is kept on ``payload`` so callers that catch this can
    still inspect what was sent.
    """

    def __init__(self, payload: Any = None) -> None:
        super().__init__("Uncaught, unspecified 'error' event.")
        self.payload = payload
