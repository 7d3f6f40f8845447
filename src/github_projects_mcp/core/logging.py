import logging
import sys
from typing import Any, Optional, TextIO

# Rendered in this order after level/logger/event.
LOG_EXTRA_FIELDS = (
    "request_id",
    "tool",
    "operation",
    "outcome",
    "status",
    "duration_ms",
    "attempt",
    "error_type",
)

# Libraries that log every request at INFO; kept at WARNING unless debugging.
NOISY_LOGGERS = ("httpx", "httpcore")


class LogfmtFormatter(logging.Formatter):
    """logfmt lines: ``level=info logger=... event=gql_call tool=... status=200``."""

    def format(self, record: logging.LogRecord) -> str:
        pairs = [
            ("level", record.levelname.lower()),
            ("logger", record.name),
            ("event", record.getMessage()),
        ]
        pairs.extend(
            (key, getattr(record, key))
            for key in LOG_EXTRA_FIELDS
            if getattr(record, key, None) is not None
        )
        if record.exc_info and record.exc_info[0] is not None:
            pairs.append(("exc_type", record.exc_info[0].__name__))

        return " ".join(f"{k}={self._fmt_val(v)}" for k, v in pairs if v != "")

    @staticmethod
    def _fmt_val(val: Any) -> str:
        if isinstance(val, (bool, int, float)):
            return str(val)
        s = str(val)
        if not s or any(c in s for c in ' ="'):
            s = '"' + s.replace('"', '\\"') + '"'
        return s


def setup_logging(level: str = "INFO", stream: Optional[TextIO] = None) -> None:
    """Route all logging to stderr as logfmt; stdout belongs to the MCP stdio stream."""
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(LogfmtFormatter())

    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
    root.addHandler(handler)
    root.setLevel(resolved)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(
            resolved if resolved <= logging.DEBUG else logging.WARNING
        )


__all__ = ["setup_logging", "LogfmtFormatter", "LOG_EXTRA_FIELDS"]
