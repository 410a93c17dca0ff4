# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Structured JSON logger for hostcheck.

Diagnostics only. The report itself is rendered by hostcheck.reporting onto
stdout, so log lines default to stderr where they can't corrupt it.

Modules get their logger from `get_logger(__name__)`. The bootstrap calls
`get_logger("hostcheck", level, file)` once, which attaches a JSON stream
handler and an optional file handler to the package logger. A line looks like:
  {"ts": "2026-...", "level": "INFO", "module": "hostcheck.checks.runner", "msg": "Requirement check", "check": "setting", ...}
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, TextIO

# Internal LogRecord attributes that should never leak into the JSON line.
_STANDARD_ATTRS = frozenset({
    "name",
    "msg",
    "args",
    "created",
    "relativeCreated",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "pathname",
    "filename",
    "module",
    "levelno",
    "levelname",
    "processName",
    "process",
    "threadName",
    "thread",
    "message",
    "msecs",
    "taskName",
})


class JsonFormatter(logging.Formatter):
    """
    One JSON object per line, always carrying:
      ts:     UTC timestamp, ISO 8601
      level:  level name
      module: logger name, normally the dotted module path
      msg:    rendered message

    Fields passed through the `extra` kwarg are merged in as additional
    context, e.g. the setting name and detected value of a check.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "ts": datetime.now(tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "module": record.name,
            "msg": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key not in _STANDARD_ATTRS and not key.startswith("_"):
                entry[key] = value

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _resolve_log_level(level_name: str) -> int:
    """Turn a level name string into the corresponding logging constant."""
    upper = level_name.upper()
    if upper not in _VALID_LOG_LEVELS:
        raise ValueError(
            f"Invalid log level '{level_name}'. Must be one of: {', '.join(sorted(_VALID_LOG_LEVELS))}"
        )
    return getattr(logging, upper)


def get_logger(
    name: str,
    log_level: Optional[str] = None,
    log_file: Optional[Path] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Create a structured JSON logger.

    Every module should call this once at the top, without a level, and use
    the returned logger instance. Such module loggers carry no handlers of
    their own and propagate to the `hostcheck` package logger, which the
    bootstrap configures once per run with the requested level and file.

    Passing a level configures the named logger with its own JSON handlers,
    replacing any it had before, so repeated bootstraps never stack output.

    Args:
        name: Logger name, typically __name__ of the calling module.
        log_level: One of DEBUG, INFO, WARNING, ERROR, CRITICAL, or None to
                   inherit from the package logger.
        log_file: Optional path to a log file. If provided, logs go to both
                  the stream and the file.
        stream: Where log lines are written. Defaults to stderr.

    Returns:
        A logging.Logger that outputs structured JSON.
    """
    logger = logging.getLogger(name)
    if log_level is None:
        return logger

    level = _resolve_log_level(log_level)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = JsonFormatter()

    stream_handler = logging.StreamHandler(stream=stream or sys.stderr)
    stream_handler.setLevel(level)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # Don't propagate to root logger, we handle all output ourselves.
    logger.propagate = False

    return logger
