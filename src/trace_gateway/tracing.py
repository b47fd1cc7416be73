"""
trace_gateway.tracing

Trace context snapshot and X-Ray id conversion.

Responsibilities:
- Read the ambient OpenTelemetry span (never create or modify one).
- Fall back to the Lambda-provided `_X_AMZN_TRACE_ID` value when no span is active.
- Convert 32-hex OpenTelemetry trace ids to and from the X-Ray `1-xxxxxxxx-yyy...` form.
- Render the outbound `X-Amzn-Trace-Id` propagation header.
"""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass

from opentelemetry import trace

XRAY_TRACE_HEADER = "X-Amzn-Trace-Id"
LAMBDA_TRACE_ENV = "_X_AMZN_TRACE_ID"

_HEX32 = re.compile(r"^[0-9a-fA-F]{32}$")
_XRAY_ID = re.compile(r"^1-([0-9a-fA-F]{8})-([0-9a-fA-F]{24})$")


def format_xray_trace_id(trace_id: str) -> str:
    """
    `67890abc12345678901234567890abcd` -> `1-67890abc-12345678901234567890abcd`.

    X-Ray reads the first 8 hex chars as the epoch timestamp and the remaining 24 as
    the unique part. Anything that is not a 32-hex id is returned unchanged.
    """

    if not _HEX32.match(trace_id):
        return trace_id
    return f"1-{trace_id[:8]}-{trace_id[8:]}"


def parse_xray_trace_id(value: str) -> str | None:
    # Inverse of `format_xray_trace_id`; None for anything that is not `1-<8>-<24>`.
    m = _XRAY_ID.match(value.strip())
    if m is None:
        return None
    return m.group(1) + m.group(2)


def parse_trace_header(header: str) -> TraceContext:
    """
    Parse `Root=1-...;Parent=...;Sampled=1` (header or Lambda env format).
    Unknown keys are ignored; an unusable Root yields the empty context.
    """

    parts: dict[str, str] = {}
    for item in header.split(";"):
        key, sep, value = item.partition("=")
        if sep:
            parts[key.strip().lower()] = value.strip()

    trace_id = parse_xray_trace_id(parts.get("root", ""))
    if trace_id is None:
        return TraceContext()
    parent = parts.get("parent") or None
    return TraceContext(trace_id=trace_id.lower(), span_id=parent.lower() if parent else None)


@dataclass(frozen=True, slots=True)
class TraceContext:
    trace_id: str | None = None
    span_id: str | None = None

    @property
    def is_empty(self) -> bool:
        return self.trace_id is None

    @property
    def xray_trace_id(self) -> str | None:
        if self.trace_id is None:
            return None
        return format_xray_trace_id(self.trace_id)

    def propagation_header(self) -> str | None:
        xray_id = self.xray_trace_id
        if xray_id is None:
            return None
        if self.span_id:
            return f"Root={xray_id};Parent={self.span_id}"
        return f"Root={xray_id}"

    def log_fields(self) -> dict[str, str]:
        # Field names are the ones the log/trace correlation backend indexes on.
        fields: dict[str, str] = {}
        if self.trace_id is not None:
            fields["traceId"] = self.xray_trace_id or self.trace_id
        if self.span_id is not None:
            fields["spanId"] = self.span_id
        return fields


class TraceContextProvider:
    """
    Read-only view of the ambient trace.

    Constructed once per process and passed explicitly to the resolver, the gateway
    client and the logger.
    """

    def __init__(
        self,
        *,
        environ: Mapping[str, str] | None = None,
        env_fallback: bool = True,
    ) -> None:
        self._environ = environ if environ is not None else os.environ
        self._env_fallback = env_fallback

    def current(self) -> TraceContext:
        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            return TraceContext(
                trace_id=trace.format_trace_id(span_context.trace_id),
                span_id=trace.format_span_id(span_context.span_id),
            )

        if self._env_fallback:
            header = self._environ.get(LAMBDA_TRACE_ENV)
            if header:
                return parse_trace_header(header)

        return TraceContext()


# --- Module Notes -----------------------------------------------------------
# The dev backend uses `parse_trace_header` to turn an incoming header back into a
# remote span context (see `observability.middleware`).
