"""
trace_gateway.resolver.entrypoint

AWS Lambda entrypoint for the AppSync direct resolver (`trace_gateway.resolver.entrypoint.handler`).

Responsibilities:
- Configure structured logging once per cold start.
- Parse the raw event into an `Invocation` and the Lambda context into `ExecutionMeta`.
- Run the async handler to completion and return its envelope.
- Turn invalid process settings into an `InternalError` envelope instead of a raised fault.
"""

from __future__ import annotations

import asyncio
from functools import lru_cache
from typing import Any

from pydantic import ValidationError

from trace_gateway.errors import ErrorType, error_envelope
from trace_gateway.models import ExecutionMeta, Invocation
from trace_gateway.observability.logging import StructuredLogger, configure_logging
from trace_gateway.resolver.handler import InvocationHandler, config_error_message
from trace_gateway.settings import get_settings
from trace_gateway.tracing import TraceContextProvider

LOGGER_NAME = "trace_gateway.resolver"


@lru_cache(maxsize=1)
def get_handler() -> InvocationHandler:
    # Process-wide handles (logger, trace provider) are created once and only read afterwards.
    # A ValidationError is not cached, so a fixed environment recovers on the next call.
    settings = get_settings()
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    trace = TraceContextProvider(env_fallback=settings.xray_env_fallback)
    logger = StructuredLogger(LOGGER_NAME, trace=trace)
    return InvocationHandler(trace=trace, logger=logger)


def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    meta = ExecutionMeta.from_lambda_context(context)

    try:
        resolver = get_handler()
    except ValidationError as e:
        # Logging is not configured yet; structlog's defaults still print one line.
        StructuredLogger(LOGGER_NAME, trace=TraceContextProvider()).error(
            "configuration error", exc=e, invocationId=meta.request_id
        )
        return error_envelope(config_error_message(e), ErrorType.internal_error)

    try:
        invocation = Invocation.model_validate(event)
    except ValidationError as e:
        resolver.logger.error("malformed invocation event", exc=e, invocationId=meta.request_id)
        return error_envelope("Malformed invocation event", ErrorType.internal_error)

    return asyncio.run(resolver.handle(invocation, meta))


# --- Module Notes -----------------------------------------------------------
# Lambda reuses the process between invocations; `asyncio.run` gives each invocation
# a fresh event loop, so no connection state survives from a previous call.
