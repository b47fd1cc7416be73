"""
trace_gateway.observability.logging

Structured logging configuration and the trace-correlated logger.

Responsibilities:
- Configure `structlog` for single-line JSON logs on stdout (CloudWatch picks them up as-is).
- Provide `StructuredLogger`, which stamps every entry with the current trace/span ids.
- Guarantee that emitting a log entry never raises into the caller.
"""

from __future__ import annotations

import enum
import logging
import sys
from typing import Any

import structlog

from trace_gateway.tracing import TraceContextProvider

# Fields owned by the logger; caller-supplied values under these names are dropped.
RESERVED_FIELDS = frozenset({"event", "level", "message", "timestamp", "traceId", "spanId"})


class LogLevel(enum.StrEnum):
    debug = "DEBUG"
    info = "INFO"
    warning = "WARNING"
    error = "ERROR"


def configure_logging(*, service_name: str, level: str) -> None:
    """
    Structured JSON logs, one object per line on stdout.
    """

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    structlog.configure(
        processors=[
            *shared_processors(service_name=service_name),
            structlog.stdlib.add_logger_name,
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def shared_processors(*, service_name: str) -> list[Any]:
    # Everything up to (not including) rendering; tests append a LogCapture instead.
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        _uppercase_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
        structlog.processors.EventRenamer("message"),
        _add_service_name(service_name),
    ]


def _uppercase_level(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    level = event_dict.get("level")
    if isinstance(level, str):
        event_dict["level"] = level.upper()
    return event_dict


def _add_service_name(service_name: str):
    def processor(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        return event_dict

    return processor


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


class StructuredLogger:
    """
    Trace-correlated, fire-and-forget logger.

    The trace provider is injected so correlation never depends on hidden module state.
    """

    def __init__(self, name: str, *, trace: TraceContextProvider) -> None:
        self._log = get_logger(name)
        self._trace = trace

    def emit(self, level: LogLevel | str, message: str, /, **fields: Any) -> None:
        try:
            method = getattr(self._log, LogLevel(str(level).upper()).name)
            entry = {k: v for k, v in fields.items() if k not in RESERVED_FIELDS}
            # Trace fields are merged last so they always win.
            entry.update(self._trace.current().log_fields())
            method(message, **entry)
        except Exception:
            # A broken sink must never change the invocation outcome.
            pass

    def debug(self, message: str, /, **fields: Any) -> None:
        self.emit(LogLevel.debug, message, **fields)

    def info(self, message: str, /, **fields: Any) -> None:
        self.emit(LogLevel.info, message, **fields)

    def warning(self, message: str, /, **fields: Any) -> None:
        self.emit(LogLevel.warning, message, **fields)

    def error(
        self, message: str, /, *, exc: BaseException | None = None, **fields: Any
    ) -> None:
        if exc is not None:
            fields["error"] = {"name": type(exc).__name__, "message": str(exc)}
        self.emit(LogLevel.error, message, **fields)


# --- Module Notes -----------------------------------------------------------
# Request-scoped metadata for the dev backend is bound via contextvars in
# `observability.middleware`; the resolver passes everything explicitly.
