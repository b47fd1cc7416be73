"""
tests.test_smoke

End-to-end smoke tests: resolver -> gateway client -> dev backend, in process.

Responsibilities:
- Ensure a supported invocation round-trips through the real HTTP client and backend app.
- Ensure the trace id reaches the backend and shows up in its logs.
"""

from __future__ import annotations

import httpx
import pytest

from trace_gateway.backend.app import create_app
from trace_gateway.models import ExecutionMeta, Invocation
from trace_gateway.resolver.handler import InvocationHandler
from trace_gateway.settings import Settings
from trace_gateway.tracing import LAMBDA_TRACE_ENV, TraceContextProvider

XRAY_TRACE_ID = "1-67890abc-12345678901234567890abcd"
SPAN_HEX = "53995c3f42cd8ad8"


def _resolver(logger, trace_provider, *, api_path: str = "/api/hello") -> InvocationHandler:
    backend = create_app(settings=Settings(env="test"), configure_logs=False)
    return InvocationHandler(
        trace=trace_provider,
        logger=logger,
        settings_factory=lambda: Settings(
            env="test", alb_endpoint="http://backend.internal", api_path=api_path
        ),
        transport=httpx.ASGITransport(app=backend),
    )


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("ALB_ENDPOINT", "API_PATH", "GATEWAY_TIMEOUT_MS"):
        monkeypatch.delenv(name, raising=False)


@pytest.mark.asyncio
async def test_get_hello_end_to_end(logger, log_capture) -> None:
    # No span is active in this process; the id can only reach the backend via the header.
    lambda_trace = TraceContextProvider(
        environ={LAMBDA_TRACE_ENV: f"Root={XRAY_TRACE_ID};Parent={SPAN_HEX};Sampled=1"}
    )
    resolver = _resolver(logger, lambda_trace)

    result = await resolver.handle(Invocation(field_name="getHello"), ExecutionMeta(request_id="smoke-1"))

    assert set(result) == {"message", "timestamp"}
    assert result["message"] == "Hello World"

    backend_entries = [e for e in log_capture.entries if e["message"] == "processing hello request"]
    [entry] = backend_entries
    assert entry["traceId"] == XRAY_TRACE_ID


@pytest.mark.asyncio
async def test_wrong_path_surfaces_as_backend_error(logger, trace_provider) -> None:
    resolver = _resolver(logger, trace_provider, api_path="/api/missing")

    result = await resolver.handle(Invocation(field_name="getHello"), ExecutionMeta(request_id="smoke-2"))

    assert result["errorType"] == "BackendError"
    assert result["errorInfo"]["statusCode"] == 404
    assert "404" in result["message"]


# --- Module Notes -----------------------------------------------------------
# ASGITransport stands in for the ALB; no sockets are opened.
