import argparse
import logging

from fastev.emitter import MAX_ARGUMENTS, normalize_arity


def parse_event_declaration(declaration):
    """Split NAME[=ARITY] into a (name, arity) pair. A missing arity means the maximum."""
    name, sep, arity = declaration.partition("=")
    name = name.strip()
    if not name:
        raise argparse.ArgumentTypeError(f"Invalid event declaration: {declaration!r}")
    return name, normalize_arity(arity) if sep else MAX_ARGUMENTS


def parse_log_level(level):
    """Accept a level name (DEBUG, info, ...) or its int value."""
    if str(level).lstrip("-").isdigit():
        return int(level)
    value = logging.getLevelName(str(level).upper())
    if not isinstance(value, int):
        raise argparse.ArgumentTypeError(f"Unknown log level: {level}")
    return value


# Default values for CLI args
default_config_file_path = "events.ini"
default_log_level = logging.INFO
default_max_log_files = 5


def parse_fastev_args(argv=None):
    # parse CLI args
    parser = argparse.ArgumentParser(
        prog="fastev",
        description="Inspect an event table and trace emissions through an EventEmitter.",
    )

    parser.add_argument(
        "-c",
        "--config-file-path",
        help="Path to an INI file with [EVENTS] and [EMITTER] sections. (default: %s)"
        % default_config_file_path,
        default=default_config_file_path,
        required=False,
    )
    parser.add_argument(
        "-e",
        "--event",
        dest="events",
        metavar="NAME[=ARITY]",
        action="append",
        type=parse_event_declaration,
        default=[],
        help="Declare an extra event, optionally with its argument count (0-%d). Can be repeated."
        % MAX_ARGUMENTS,
        required=False,
    )
    parser.add_argument(
        "--max-listeners",
        type=int,
        default=None,
        help="Listener count that triggers the leak warning, 0 to disable. Overrides the config file.",
        required=False,
    )
    parser.add_argument(
        "--dedup",
        action="store_true",
        help="Ignore duplicate registrations of the same handler.",
        required=False,
    )
    parser.add_argument(
        "--emit",
        nargs="+",
        metavar=("EVENT", "ARG"),
        help="Emit EVENT with up to %d string arguments and log every handler call."
        % MAX_ARGUMENTS,
        default=None,
        required=False,
    )
    parser.add_argument(
        "-l",
        "--log-level",
        type=parse_log_level,
        help=f"Logging level name or int value (DEBUG: 10, INFO: 20, WARNING: 30, ERROR: 40, CRITICAL: 50). (default: {default_log_level} )",
        default=default_log_level,
        required=False,
    )
    parser.add_argument(
        "--log-dir",
        help="Also write logs to rotating files in this directory.",
        default=None,
        required=False,
    )
    parser.add_argument(
        "--max-log-files",
        type=int,
        default=default_max_log_files,
        help="Number of log files to keep in --log-dir. (default: %s)" % default_max_log_files,
        required=False,
    )

    args = parser.parse_args(argv)

    # additional sanitization of args:
    args.events = dict(args.events)
    if args.max_listeners is not None and args.max_listeners < 0:
        parser.error("--max-listeners must be 0 or greater")

    return args
