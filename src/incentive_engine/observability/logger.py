"""Structured logging setup and per-drain trace ids.

Each ``IncentiveProcessor.run()`` opens a ``drain_context``: a fresh trace
id is bound into structlog's context variables for the length of the drain,
so every audit line emitted by that drain carries the same ``trace_id``.
"""

from __future__ import annotations

import logging
import sys
import uuid
from contextlib import contextmanager
from typing import Any, Iterator

import structlog

TRACE_ID_KEY = "trace_id"


def new_trace_id() -> str:
    return uuid.uuid4().hex


def current_trace_id() -> str | None:
    """Trace id of the drain in progress, or ``None`` outside a drain."""
    return structlog.contextvars.get_contextvars().get(TRACE_ID_KEY)


@contextmanager
def drain_context(trace_id: str | None = None) -> Iterator[str]:
    """Bind *trace_id* (or a new one) until the block exits."""
    tid = trace_id or new_trace_id()
    tokens = structlog.contextvars.bind_contextvars(**{TRACE_ID_KEY: tid})
    try:
        yield tid
    finally:
        structlog.contextvars.reset_contextvars(**tokens)


def setup_logging(level: str = "INFO", format: str = "json") -> None:
    """Route structlog through stdlib logging on stderr.

    ``format`` is ``"json"`` for log shippers or ``"console"`` for a
    terminal.  Unknown levels fall back to INFO.
    """
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.UnicodeDecoder(),
    ]
    if format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
