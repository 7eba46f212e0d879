from fastev.emitter import EventEmitter, HandlerEntry
from fastev.lib.errors import EmitterError, InvalidHandler, TooManyArguments, UnhandledError
from fastev.version import __version__

PACKAGE = __package__
VERSION = __version__

__all__ = [
    "VERSION",
    "PACKAGE",
    EventEmitter.__name__,
    HandlerEntry.__name__,
    EmitterError.__name__,
    InvalidHandler.__name__,
    TooManyArguments.__name__,
    UnhandledError.__name__,
]
