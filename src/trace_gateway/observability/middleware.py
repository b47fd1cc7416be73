"""
trace_gateway.observability.middleware

HTTP middleware for the dev backend's request-scoped trace and logging context.

Responsibilities:
- Generate/propagate request IDs.
- Continue an incoming `X-Amzn-Trace-Id` as the current (remote) span for the request.
- Bind request metadata into structlog contextvars.
"""

from __future__ import annotations

import uuid

import structlog
from opentelemetry import context as otel_context
from opentelemetry import trace
from opentelemetry.trace import NonRecordingSpan, SpanContext, TraceFlags
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from trace_gateway.tracing import XRAY_TRACE_HEADER, TraceContext, parse_trace_header


def remote_span_context(ctx: TraceContext) -> SpanContext | None:
    # X-Ray requires a parent id to continue a trace; without one there is nothing to attach.
    if ctx.trace_id is None or not ctx.span_id:
        return None
    try:
        return SpanContext(
            trace_id=int(ctx.trace_id, 16),
            span_id=int(ctx.span_id, 16),
            is_remote=True,
            trace_flags=TraceFlags(TraceFlags.SAMPLED),
        )
    except ValueError:
        return None


class TraceContextMiddleware(BaseHTTPMiddleware):
    """
    - Ensures every request has a request id
    - Makes the caller's trace the current span so downstream logs correlate
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        incoming = parse_trace_header(request.headers.get(XRAY_TRACE_HEADER, ""))

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            path=request.url.path,
            method=request.method,
        )

        token = None
        span_context = remote_span_context(incoming)
        if span_context is not None:
            token = otel_context.attach(trace.set_span_in_context(NonRecordingSpan(span_context)))
        try:
            response: Response = await call_next(request)
        finally:
            if token is not None:
                otel_context.detach(token)
            # Avoid leaking context across requests under async concurrency.
            structlog.contextvars.clear_contextvars()

        response.headers["x-request-id"] = request_id
        return response


# --- Module Notes -----------------------------------------------------------
# The gateway side never attaches spans; it only reads them through
# `tracing.TraceContextProvider`.
