"""
Structured events for GraphQL round trips and tool invocations.

Events are plain log records on the ``github_projects_mcp.observability``
logger; their fields travel as record attributes so LogfmtFormatter can
render them.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator

OBSERVABILITY_LOGGER = "github_projects_mcp.observability"

GQL_CALL = "gql_call"
TOOL_CALL = "tool_call"

# Attributes every LogRecord already carries; extras must not overwrite them.
RESERVED_LOG_KEYS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


def log_event(event: str, logger: logging.Logger | None = None, **fields: Any) -> None:
    log = logger or logging.getLogger(OBSERVABILITY_LOGGER)
    extra = {
        k: v for k, v in fields.items() if v is not None and k not in RESERVED_LOG_KEYS
    }
    extra["event"] = event
    log.info(event, extra=extra)


@contextmanager
def timed_event(event: str, **fields: Any) -> Iterator[Dict[str, Any]]:
    """
    Emit ``event`` when the block exits, with ``duration_ms`` filled in.
    The yielded dict is the field set; the block may add to it (outcome, ids).
    """
    start = time.perf_counter()
    try:
        yield fields
    finally:
        fields["duration_ms"] = int((time.perf_counter() - start) * 1000)
        log_event(event, **fields)


__all__ = [
    "GQL_CALL",
    "TOOL_CALL",
    "OBSERVABILITY_LOGGER",
    "log_event",
    "timed_event",
]
