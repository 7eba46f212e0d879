"""Fixed-arity event emitter.

Every event has a declared number of positional arguments (0 to 3). The
handlers of an event are folded into a single dispatch callable taking
exactly that many arguments, so emitting is one lookup and one call.
"""

from __future__ import annotations

import functools
import inspect
import logging
import math
import numbers
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Mapping

from fastev.lib.errors import InvalidHandler, TooManyArguments, UnhandledError

MAX_ARGUMENTS = 3
DEFAULT_MAX_LISTENERS = 10

# Merged over any caller supplied event table
BUILTIN_EVENTS = {
    "newListener": 2,  # handler added
    "oldListener": 2,  # handler removed
    "error": 1,  # raises unless at least one listener is attached
}

_PADDING = (None,) * MAX_ARGUMENTS


def _noop(*args) -> None:
    pass


def _same_handler(registered: Callable, handler: Callable) -> bool:
    """Identity match, except bound methods of the same object and function."""
    if registered is handler:
        return True
    if inspect.ismethod(registered) and inspect.ismethod(handler):
        return registered.__self__ is handler.__self__ and registered.__func__ is handler.__func__
    return False


def _default_error(err: Any = None) -> None:
    if isinstance(err, Exception):
        raise err
    raise UnhandledError(err)


def normalize_arity(value: Any) -> int:
    """Clamp a declared argument count to the range [0, MAX_ARGUMENTS].

    Values that are not finite numbers (None, NaN, "abc", ...) mean the maximum.
    """
    try:
        count = float(value)
    except OverflowError:
        # int too large for a float
        return 0 if value < 0 else MAX_ARGUMENTS
    except (TypeError, ValueError):
        return MAX_ARGUMENTS
    if not math.isfinite(count):
        return MAX_ARGUMENTS
    return max(0, min(int(count), MAX_ARGUMENTS))


@dataclass(frozen=True)
class HandlerEntry:
    """A registered callback.

    ``original`` is set when ``callback`` wraps a caller's function (see
    EventEmitter.once), so the entry can still be removed with that function.
    """

    callback: Callable
    original: Callable | None = None

    @property
    def listener(self) -> Callable:
        """The function the caller registered."""
        return self.original if self.original is not None else self.callback

    def matches(self, handler: Callable) -> bool:
        if _same_handler(self.callback, handler):
            return True
        return self.original is not None and _same_handler(self.original, handler)


def _compose(event: str, arity: int, callbacks: tuple) -> Callable:
    """Fold callbacks into one callable taking exactly ``arity`` arguments.

    The tuple is a snapshot: changes to the handler list made while the
    returned callable runs only show up in the next composition.
    """
    if arity not in range(MAX_ARGUMENTS + 1):
        raise TooManyArguments(event, arity)

    if len(callbacks) == 1:
        return callbacks[0]

    if arity == 0:

        def dispatch():
            for callback in callbacks:
                callback()

    elif arity == 1:

        def dispatch(a):
            for callback in callbacks:
                callback(a)

    elif arity == 2:

        def dispatch(a, b):
            for callback in callbacks:
                callback(a, b)

    else:

        def dispatch(a, b, c):
            for callback in callbacks:
                callback(a, b, c)

    return dispatch


class EventEmitter:
    """Synchronous event dispatcher with a fixed argument count per event.

    Handlers are called in registration order on the caller's stack;
    exceptions bubble up and stop the remaining handlers of that emission.

    Args:
        events: Mapping of event name to the number of arguments its handlers
            receive. Events missing from it are declared with the maximum (3)
            when a listener is first added.
        max_listeners: Listener count that triggers a one-time leak warning
            per event. 0 disables the warning.
        dedup_listeners: Ignore registrations of a handler that is already
            attached to the event.
    """

    def __init__(
        self,
        events: Mapping[str, Any] | None = None,
        *,
        max_listeners: int = DEFAULT_MAX_LISTENERS,
        dedup_listeners: bool = False,
    ) -> None:
        self._dispatch: dict[str, Callable] = {}
        self._handlers: dict[str, list[HandlerEntry]] = {}
        self._arity: dict[str, int] = {}
        self._warned: dict[str, bool] = {}

        self.set_max_listeners(max_listeners)
        self.dedup_listeners = dedup_listeners

        declared = dict(events or {})
        declared.update(BUILTIN_EVENTS)
        for event, count in declared.items():
            self._arity[event] = normalize_arity(count)
            self.remove_all_listeners(event)

    def __getattr__(self, name: str) -> Any:
        # emit_<event> shortcuts for every known event
        if name.startswith("emit_"):
            event = name[len("emit_") :]
            if event in self.__dict__.get("_dispatch", {}):
                return functools.partial(self.emit, event)
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    def add_listener(self, event: str, handler: Callable) -> EventEmitter:
        """Register a handler for an event. Returns the emitter for chaining."""
        if not callable(handler):
            raise InvalidHandler(handler)
        return self._add_entry(event, HandlerEntry(handler))

    on = add_listener
    add_event_listener = add_listener

    def once(self, event: str, handler: Callable) -> EventEmitter:
        """Register a handler that removes itself the first time it runs.

        The handler is called without arguments, whatever the event was
        emitted with.
        """
        if not callable(handler):
            raise InvalidHandler(handler)

        def _once(*args):
            self.remove_listener(event, _once)
            handler()

        return self._add_entry(event, HandlerEntry(_once, handler))

    def _add_entry(self, event: str, entry: HandlerEntry) -> EventEmitter:
        if event not in self._dispatch:
            self.remove_all_listeners(event)

        entries = self._handlers[event]
        if self.dedup_listeners and any(e.matches(entry.listener) for e in entries):
            return self

        entries.append(entry)
        count = len(entries)
        try:
            # The new handler is not part of the dispatch unit yet
            self.emit("newListener", event, entry.listener)

            if self.max_listeners > 0 and count >= self.max_listeners and not self._warned[event]:
                logging.warning(
                    f"Possible EventEmitter memory leak detected. {count} listeners added to "
                    f"event {event}. Use emitter.set_max_listeners() to increase limit.",
                    stack_info=True,
                )
                self._warned[event] = True
        finally:
            self._rebuild(event)

        logging.debug(f"Added listener to << {event} >> ({count} registered)")
        return self

    def remove_listener(self, event: str, handler: Callable | None = None) -> EventEmitter:
        """Remove a handler, matched by the function that was registered.

        Without a handler this removes every listener of the event.
        """
        if handler is None:
            return self.remove_all_listeners(event)

        entry = next((e for e in self._handlers.get(event, ()) if e.matches(handler)), None)
        if entry is None:
            return self

        self.emit("oldListener", event, entry.listener)

        # oldListener handlers may have changed the list in the meantime
        entries = self._handlers[event]
        for index, candidate in enumerate(entries):
            if candidate is entry:
                del entries[index]
                break
        self._rebuild(event)

        logging.debug(f"Removed listener from << {event} >> ({len(entries)} registered)")
        return self

    off = remove_listener

    def remove_all_listeners(self, event: str | None = None) -> EventEmitter:
        """Remove every listener of an event, or of all known events."""
        if event is None:
            for name in list(self._dispatch):
                self.remove_all_listeners(name)
            return self

        self._arity.setdefault(event, MAX_ARGUMENTS)
        self._handlers[event] = []
        self._warned[event] = False
        self._rebuild(event)
        return self

    def _rebuild(self, event: str) -> None:
        callbacks = tuple(entry.callback for entry in self._handlers[event])
        if callbacks:
            self._dispatch[event] = _compose(event, self._arity[event], callbacks)
        else:
            self._dispatch[event] = _default_error if event == "error" else _noop

    def emit(self, event: str, *args: Any) -> bool:
        """Call every handler of an event with up to three arguments.

        Arguments are padded with None or truncated to the event's declared
        count. Returns False when nothing is listening.
        """
        if len(args) > MAX_ARGUMENTS:
            raise TooManyArguments(event, len(args))

        dispatch = self._dispatch.get(event)
        if dispatch is None or (not self._handlers[event] and event != "error"):
            return False

        dispatch(*(args + _PADDING)[: self._arity[event]])
        return True

    def set_max_listeners(self, max_listeners: Any = None) -> EventEmitter:
        """Set the leak warning threshold. Non-numeric values restore the default."""
        if isinstance(max_listeners, bool) or not isinstance(max_listeners, numbers.Real):
            max_listeners = DEFAULT_MAX_LISTENERS
        self.max_listeners = max_listeners
        return self

    def listeners(self, event: str | None = None):
        """Return the entries of one event, or a read-only table of all of them."""
        if event is None:
            return MappingProxyType(
                {name: tuple(entries) for name, entries in self._handlers.items()}
            )
        return tuple(self._handlers.get(event, ()))

    def listener_count(self, event: str) -> int:
        return len(self._handlers.get(event, ()))

    def event_names(self) -> tuple[str, ...]:
        return tuple(self._dispatch)

    def arity(self, event: str) -> int:
        return self._arity.get(event, MAX_ARGUMENTS)
