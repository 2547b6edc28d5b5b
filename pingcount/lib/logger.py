"""Process-wide structured logging configuration."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any, Iterator

_DEFAULT_LEVEL = logging.INFO

# Attribute names every LogRecord carries; anything else arrived through ``extra=``
_STANDARD_RECORD_FIELDS = frozenset(
    logging.LogRecord("", logging.NOTSET, "", 0, "", None, None).__dict__
) | {"message", "asctime"}


def _extra_fields(record: logging.LogRecord) -> Iterator[tuple[str, Any]]:
    for key, value in record.__dict__.items():
        if key in _STANDARD_RECORD_FIELDS:
            continue
        try:
            json.dumps(value)
        except (TypeError, ValueError):
            value = repr(value)
        yield key, value


class JsonFormatter(logging.Formatter):
    """One JSON object per line: when, how severe, which logger, what happened.

    Fields passed via ``extra=`` (client counts, tick numbers, URLs) are lifted
    to the top level next to the message.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(_extra_fields(record))

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            payload["stack"] = self.formatStack(record.stack_info)

        return json.dumps(payload, ensure_ascii=False)


def configure_logging(level: str | int | None = None) -> None:
    """Install the JSON handler on the root logger once; later calls only adjust the level."""

    root = logging.getLogger()
    if getattr(root, "_structured_configured", False):  # type: ignore[attr-defined]
        if level is not None:
            root.setLevel(_coerce_level(level))
        return

    root.setLevel(_coerce_level(level) if level is not None else _DEFAULT_LEVEL)
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root.handlers.clear()
    root.addHandler(handler)

    root._structured_configured = True  # type: ignore[attr-defined]


def _coerce_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level '{level}'")
    return resolved


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(name)
