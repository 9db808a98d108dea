"""
Structured Logging Configuration
Compiler diagnostics through structlog.

Recoverable input faults (dangling references, malformed payloads, cycles,
dialect gaps) are logged as warnings instead of raised. While a
``capture_diagnostics()`` block is active those warnings are also collected,
so a compilation run can report them alongside its artifacts.
"""

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator, MutableMapping, TextIO

import structlog
from pythonjsonlogger import jsonlogger

DIAGNOSTIC_METHODS = frozenset({"warn", "warning", "error", "critical", "exception"})

_diagnostics: ContextVar[list[dict[str, Any]] | None] = ContextVar("sitegen_diagnostics", default=None)


def collect_diagnostics(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Processor recording warning and error events into the active capture."""
    records = _diagnostics.get()
    if records is not None and method_name in DIAGNOSTIC_METHODS:
        records.append({"level": "warning" if method_name == "warn" else method_name, **event_dict})
    return event_dict


@contextmanager
def capture_diagnostics() -> Iterator[list[dict[str, Any]]]:
    """
    Collect warning and error events logged in this context.

    Events are collected regardless of the configured log level. Nested
    captures shadow the outer one.
    """
    records: list[dict[str, Any]] = []
    token = _diagnostics.set(records)
    try:
        yield records
    finally:
        _diagnostics.reset(token)


def configure_logging(level: str = "INFO", json_logs: bool = False, stream: TextIO | None = None) -> None:
    """
    Configure structured logging for the compiler.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: Use JSON formatter for machine-readable logs
        stream: Log destination, stderr by default so SQL or TSX written to
            stdout stays clean
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    handler = logging.StreamHandler(stream or sys.stderr)

    if json_logs:
        handler.setFormatter(jsonlogger.JsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s"))
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
    logging.basicConfig(level=log_level, handlers=[handler], force=True)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            collect_diagnostics,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer(colors=False),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structlog logger (typically for ``__name__``)."""
    return structlog.get_logger(name)


class LogContext:
    """Bind context (e.g. the run id) to all log events in scope."""

    def __init__(self, **kwargs: Any):
        self.context = kwargs

    def __enter__(self) -> "LogContext":
        structlog.contextvars.bind_contextvars(**self.context)
        return self

    def __exit__(self, *args: Any) -> None:
        structlog.contextvars.unbind_contextvars(*self.context.keys())
