"""Logging configuration for the fuel price exporter.

Everything goes to stdout, one line per record, through a single root
handler built by setup_logging().  Two formatters:

  _ContainerFormatter — human-readable, for a terminal or `docker logs`.
    Lines logged while serving a scrape carry `request_id=...`.

  _JsonFormatter — one JSON object per line, for log aggregation.
    Request fields (request_id, method, path, status_code, duration_ms)
    and bootstrap fields (postcode, stations) become top-level keys.

Set LOG_JSON=true to switch to JSON output.

The request ID lives in `request_id_var`, set by the
RequestContextMiddleware.  The root handler carries a filter that copies
it onto every record, so it survives any number of setup_logging() calls.
"""

from __future__ import annotations

import json
import logging
import sys
from contextvars import ContextVar

NO_REQUEST = "-"

request_id_var: ContextVar[str] = ContextVar("request_id", default=NO_REQUEST)

# Attributes that callers pass through `extra=` and that the JSON output
# promotes to top-level keys.
CONTEXT_FIELDS = (
    "request_id",
    "method",
    "path",
    "status_code",
    "duration_ms",
    "postcode",
    "stations",
)

# Third-party loggers clamped to WARNING or above.
_NOISY_LOGGERS = ("uvicorn", "uvicorn.access", "uvicorn.error", "httpcore", "httpx")

_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"


class _RequestContextFilter(logging.Filter):
    """Copy the current request ID onto each record that lacks one."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = request_id_var.get()  # type: ignore[attr-defined]
        return True


class _ContainerFormatter(logging.Formatter):
    """Single-line formatter for container stdout.

    `<timestamp> <LEVEL> <logger>  <message>[  request_id=..][  [file:line]]`

    The file:line suffix is only added at WARNING and above.
    """

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s %(levelname)-8s %(name)s  %(message)s", datefmt=_DATEFMT
        )

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        base = super().formatTime(record, datefmt)
        # Milliseconds go before the +HHMM offset.
        return f"{base[:-5]}.{int(record.msecs):03d}{base[-5:]}"

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        request_id = getattr(record, "request_id", NO_REQUEST)
        head, sep, trace = line.partition("\n")
        if request_id != NO_REQUEST:
            head += f"  request_id={request_id}"
        if record.levelno >= logging.WARNING:
            head += f"  [{record.filename}:{record.lineno}]"
        return head + sep + trace


class _JsonFormatter(logging.Formatter):
    """JSON Lines formatter."""

    def __init__(self) -> None:
        super().__init__(datefmt=_DATEFMT)

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (key, getattr(record, key))
            for key in CONTEXT_FIELDS
            if getattr(record, key, None) not in (None, NO_REQUEST)
        )
        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def setup_logging(level_name: str, *, json_format: bool = False) -> None:
    """Replace the root handlers with one stdout handler.

    Args:
        level_name: debug/info/warning/error; anything else means info.
        json_format: emit JSON lines instead of the container format.
    """
    level = getattr(logging, level_name.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_JsonFormatter() if json_format else _ContainerFormatter())
    # Handler-level: root logger filters are skipped for propagated records.
    handler.addFilter(_RequestContextFilter())

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
