"""Structured key=value logging for the generator, API and CLI.

Each call emits one line: ``level=... ts=...`` followed by the caller's fields,
or one compact JSON object per line in JSON mode. Errors go to stderr,
everything else to stdout.

Usage:
    from mazegen.logging_utils import get_logger
    log = get_logger("mazegen.api").bind(seed=42)
    log.info(event="maze_served", size="79x25")

Fields set to None are dropped. Reserved keys: level, ts.
Environment:
    MAZEGEN_LOG_LEVEL   debug | info | warn | error (default info)
    MAZEGEN_LOG_JSON    1 to emit one JSON object per line
"""

from __future__ import annotations

import json
import os
import sys
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
_TRUTHY = ("1", "true", "yes", "on")
CURRENT_LEVEL = LEVELS.get(os.getenv("MAZEGEN_LOG_LEVEL", "info").lower(), LEVELS["info"])
JSON_MODE = os.getenv("MAZEGEN_LOG_JSON", "0").lower() in _TRUTHY


def set_level(level: str) -> None:
    global CURRENT_LEVEL
    key = level.lower()
    if key not in LEVELS:
        raise ValueError(f"unknown log level {level!r}; expected one of {sorted(LEVELS)}")
    CURRENT_LEVEL = LEVELS[key]


def configure(level: str | None = None, json_mode: bool | None = None) -> None:
    """Apply CLI overrides on top of the environment defaults."""
    global JSON_MODE
    if level is not None:
        set_level(level)
    if json_mode is not None:
        JSON_MODE = bool(json_mode)


def _text(value) -> str:
    if isinstance(value, (int, float)):
        return str(value)
    return str(value).replace(" ", "_")


def _format(level: str, fields: dict) -> str:
    ts = int(time.time())
    present = {k: v for k, v in fields.items() if v is not None}
    if JSON_MODE:
        return json.dumps({**present, "level": level, "ts": ts}, separators=(",", ":"), default=str)
    return " ".join([f"level={level}", f"ts={ts}"] + [f"{k}={_text(v)}" for k, v in present.items()])


class StructuredLogger:
    def __init__(self, name: str, context: dict | None = None):
        self.name = name
        self.context = dict(context or {})

    def bind(self, **context) -> "StructuredLogger":
        """Child logger that adds ``context`` to every record it writes."""
        return StructuredLogger(self.name, {**self.context, **context})

    def enabled(self, level: str) -> bool:
        return LEVELS[level] >= CURRENT_LEVEL

    def _emit(self, level: str, fields: dict) -> None:
        if not self.enabled(level):
            return
        record = {**self.context, **fields}
        record.setdefault("logger", self.name)
        print(_format(level, record), file=sys.stderr if level == "error" else sys.stdout)

    def debug(self, **fields):
        self._emit("debug", fields)

    def info(self, **fields):
        self._emit("info", fields)

    def warn(self, **fields):
        self._emit("warn", fields)

    def error(self, **fields):
        self._emit("error", fields)


_LOGGER_CACHE: dict[str, StructuredLogger] = {}


def get_logger(name: str) -> StructuredLogger:
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = StructuredLogger(name)
    return _LOGGER_CACHE[name]


log = get_logger("mazegen")
