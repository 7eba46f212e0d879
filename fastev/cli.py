"""Command line inspector for event tables."""

from __future__ import annotations

import functools
import logging
from pathlib import Path

from fastev.emitter import EventEmitter
from fastev.lib.args import parse_fastev_args
from fastev.lib.errors import EmitterError
from fastev.lib.event_config import EventConfig
from fastev.lib.logger import configure_logger


def _trace(event: str, *args) -> None:
    logging.info(f"<< {event} >> {args}")


def attach_tracer(emitter: EventEmitter, events=None) -> None:
    """Log every emission of the given events (default: all known ones).

    'error' is skipped so an unhandled error still raises.
    """
    for event in events if events is not None else emitter.event_names():
        if event != "error":
            emitter.on(event, functools.partial(_trace, event))


def print_event_table(emitter: EventEmitter) -> None:
    names = sorted(emitter.event_names())
    width = max([len("EVENT")] + [len(name) for name in names])
    print(f"{'EVENT'.ljust(width)}  ARGS  LISTENERS")
    for name in names:
        print(f"{name.ljust(width)}  {emitter.arity(name):<4}  {emitter.listener_count(name)}")


def main(argv=None) -> int:
    args = parse_fastev_args(argv)

    log_dir = Path(args.log_dir) if args.log_dir else None
    configure_logger(args.log_level, log_dir=log_dir, max_log_files=args.max_log_files)

    config = EventConfig(args.config_file_path)
    emitter = config.create_emitter(
        args.events,
        max_listeners=args.max_listeners,
        dedup_listeners=True if args.dedup else None,
    )

    if args.emit is None:
        print_event_table(emitter)
        return 0

    event, *values = args.emit
    attach_tracer(emitter)
    if event not in emitter.event_names():
        attach_tracer(emitter, [event])

    try:
        handled = emitter.emit(event, *values)
    except EmitterError as e:
        logging.error(f"Emitting << {event} >> failed: {e}")
        return 1

    if not handled:
        logging.info(f"No listeners for << {event} >>")
    return 0
