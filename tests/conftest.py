"""Pytest fixtures for fastev tests."""

import pytest

from fastev.emitter import EventEmitter

EVENTS = {"match": 2, "tick": 0, "data": 1, "triple": 3}


class Recorder:
    """Callable that records every call, in order, into a shared log."""

    def __init__(self, name, log=None):
        self.name = name
        self.log = log if log is not None else []
        self.calls = []

    def __call__(self, *args):
        self.calls.append(args)
        self.log.append((self.name, args))

    @property
    def call_count(self):
        return len(self.calls)


@pytest.fixture
def emitter():
    """An emitter with a few declared events of every arity."""
    return EventEmitter(EVENTS)


@pytest.fixture
def call_log():
    return []


@pytest.fixture
def make_recorder(call_log):
    """Factory for recorders that share one call log."""

    def _make(name):
        return Recorder(name, call_log)

    return _make


@pytest.fixture
def write_config(tmp_path):
    """Write an events INI file and return its path."""

    def _write(content, name="events.ini"):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return str(path)

    return _write
