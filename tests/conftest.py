"""
tests.conftest

Shared fixtures for resolver, gateway, logging and backend tests.

Responsibilities:
- Capture structlog entries through the production processor chain.
- Provide deterministic trace ids via non-recording OpenTelemetry spans.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import pytest
import structlog
from opentelemetry import trace
from opentelemetry.trace import NonRecordingSpan, SpanContext, TraceFlags
from structlog.testing import LogCapture

from trace_gateway.observability.logging import StructuredLogger, shared_processors
from trace_gateway.tracing import TraceContextProvider

TRACE_HEX = "67890abc12345678901234567890abcd"
SPAN_HEX = "53995c3f42cd8ad8"
XRAY_TRACE_ID = "1-67890abc-12345678901234567890abcd"


@contextmanager
def active_span(trace_hex: str = TRACE_HEX, span_hex: str = SPAN_HEX) -> Iterator[None]:
    span = NonRecordingSpan(
        SpanContext(
            trace_id=int(trace_hex, 16),
            span_id=int(span_hex, 16),
            is_remote=False,
            trace_flags=TraceFlags(TraceFlags.SAMPLED),
        )
    )
    with trace.use_span(span, end_on_exit=False):
        yield


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()


@pytest.fixture
def span_scope():
    return active_span


@pytest.fixture
def log_capture() -> LogCapture:
    capture = LogCapture()
    structlog.configure(
        processors=[*shared_processors(service_name="test"), capture],
        cache_logger_on_first_use=False,
    )
    return capture


@pytest.fixture
def trace_provider() -> TraceContextProvider:
    # Empty environ: no accidental fallback to a _X_AMZN_TRACE_ID set on the test host.
    return TraceContextProvider(environ={})


@pytest.fixture
def logger(log_capture: LogCapture, trace_provider: TraceContextProvider) -> StructuredLogger:
    return StructuredLogger("test", trace=trace_provider)


# --- Module Notes -----------------------------------------------------------
# `active_span` uses the real OpenTelemetry context API, so code under test reads it
# exactly as it would read a span started by the Lambda instrumentation layer.
