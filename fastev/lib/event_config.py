"""Event declarations loaded from an INI config file."""

from __future__ import annotations

import configparser
import logging
import os
from typing import Any

from fastev.emitter import DEFAULT_MAX_LISTENERS, MAX_ARGUMENTS, EventEmitter, normalize_arity

EVENTS_SECTION = "EVENTS"
EMITTER_SECTION = "EMITTER"


class EventConfig:
    """Reads the event table and emitter options from a config file.

    [EVENTS] maps event names to their argument counts, [EMITTER] holds the
    options passed to EventEmitter. A missing file behaves like an empty one.
    """

    DEFAULTS = {
        "max_listeners": DEFAULT_MAX_LISTENERS,
        "dedup_listeners": False,
    }

    def __init__(self, config_file_path: str = "events.ini") -> None:
        self._config_obj = configparser.ConfigParser(inline_comment_prefixes=(";", "#"))
        self._config_obj.optionxform = str  # event names are case-sensitive
        self.config_file_path = os.path.abspath(config_file_path)

        logging.debug(f"Using event config file: {self.config_file_path}")

    def _read(self) -> None:
        self._config_obj.clear()
        # Silently ignores missing files
        self._config_obj.read(self.config_file_path, encoding="utf-8")

    def get(self, option: str, default_value: Any = None) -> Any:
        """Get an [EMITTER] option, auto-converting to bool/int/float."""
        self._read()

        if not self._config_obj.has_section(EMITTER_SECTION):
            return default_value

        try:
            value = self._config_obj.get(EMITTER_SECTION, option)
            return self._convert_value(value)
        except (configparser.NoOptionError, ValueError):
            return default_value

    def get_or_default(self, option: str) -> Any:
        """Get an [EMITTER] option, falling back to DEFAULTS if not set."""
        return self.get(option, self.DEFAULTS.get(option))

    def get_events(self) -> dict[str, int]:
        """Return the [EVENTS] table with every argument count normalized."""
        self._read()

        if not self._config_obj.has_section(EVENTS_SECTION):
            return {}

        events = {}
        for name, raw in self._config_obj.items(EVENTS_SECTION):
            value = self._convert_value(raw)
            # yes/no/on/off are not argument counts
            arity = MAX_ARGUMENTS if isinstance(value, bool) else normalize_arity(value)
            if value != "" and (isinstance(value, bool) or value != arity):
                logging.warning(
                    f"Event << {name} >> declares {raw!r} arguments, using {arity} instead"
                )
            events[name] = arity
        return events

    def create_emitter(
        self, extra_events: dict[str, Any] | None = None, **overrides: Any
    ) -> EventEmitter:
        """Build an EventEmitter from the file.

        Events in `extra_events` are declared on top of the [EVENTS] table.
        Option priority: explicit keyword argument (if not None) > config file > DEFAULTS
        """
        options = {}
        for option in self.DEFAULTS:
            value = overrides.get(option)
            options[option] = value if value is not None else self.get_or_default(option)

        if not isinstance(options["dedup_listeners"], bool):
            logging.warning(
                f"Invalid dedup_listeners value {options['dedup_listeners']!r}, using False"
            )
            options["dedup_listeners"] = False

        events = self.get_events()
        events.update(extra_events or {})
        return EventEmitter(events, **options)

    def _convert_value(self, val: Any) -> Any:
        """Convert a string to bool/int/float if applicable, otherwise return as-is."""
        if not isinstance(val, str):
            return val

        val = val.strip()
        val_lower = val.lower()
        if val_lower in ("true", "yes", "on"):
            return True
        if val_lower in ("false", "no", "off"):
            return False

        # Try numeric conversion: integer first, then float
        stripped = val.lstrip("-")
        if stripped.isdigit():
            return int(val)
        if stripped.replace(".", "", 1).isdigit():
            return float(val)

        return val
