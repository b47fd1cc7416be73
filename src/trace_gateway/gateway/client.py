"""
trace_gateway.gateway.client

HTTP client boundary used by the resolver to call the backend ALB.

Responsibilities:
- Issue exactly one GET per invocation, with the X-Ray propagation header attached.
- Enforce a hard deadline over connect + full body read.
- Classify every outcome into `Success` or a typed `Failure`; never raise transport faults.
"""

from __future__ import annotations

import asyncio
from typing import Protocol

import httpx
from pydantic import ValidationError

from trace_gateway.gateway.config import GatewayConfig
from trace_gateway.gateway.results import BackendResult, Failure, FailureKind, Success
from trace_gateway.models import HelloResponse
from trace_gateway.observability.logging import StructuredLogger
from trace_gateway.tracing import XRAY_TRACE_HEADER, TraceContext

# Bodies are returned in full to the caller; only log lines are truncated.
LOG_BODY_LIMIT = 200


class GatewayClient(Protocol):
    async def call(self, config: GatewayConfig, trace_context: TraceContext) -> BackendResult: ...


def build_http_client(
    *,
    verify: bool = True,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    # No httpx-level timeout: the deadline is enforced around the whole request in `call`.
    return httpx.AsyncClient(timeout=None, verify=verify, transport=transport)


class BackendGatewayClient:
    """
    Single-shot backend caller.

    No retries: a failed attempt is terminal and is reported to the resolver as data.
    """

    def __init__(
        self,
        *,
        http: httpx.AsyncClient,
        logger: StructuredLogger,
        user_agent: str = "trace-gateway/0.1.0",
    ) -> None:
        self._http = http
        self._log = logger
        self._user_agent = user_agent

    def _headers(self, trace_context: TraceContext) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "User-Agent": self._user_agent,
        }
        trace_header = trace_context.propagation_header()
        if trace_header is not None:
            headers[XRAY_TRACE_HEADER] = trace_header
        return headers

    async def call(self, config: GatewayConfig, trace_context: TraceContext) -> BackendResult:
        self._log.debug(
            "calling backend",
            url=config.url,
            timeoutMs=config.timeout_ms,
            propagated=not trace_context.is_empty,
        )

        try:
            # Cancelling the request task makes httpx close the in-flight connection.
            async with asyncio.timeout(config.timeout_ms / 1000):
                response = await self._http.get(config.url, headers=self._headers(trace_context))
        except (TimeoutError, httpx.TimeoutException):
            self._log.error("backend call timed out", timeoutMs=config.timeout_ms)
            return Failure(kind=FailureKind.timeout, detail=f"Timeout after {config.timeout_ms}ms")
        except httpx.HTTPError as e:
            self._log.error("network error calling backend", exc=e)
            return Failure(kind=FailureKind.network_error, detail=str(e) or type(e).__name__)

        return self._classify(response)

    def _classify(self, response: httpx.Response) -> BackendResult:
        status = response.status_code
        body = response.text

        if not 200 <= status < 300:
            self._log.error(
                "backend returned error status",
                statusCode=status,
                body=body[:LOG_BODY_LIMIT],
            )
            return Failure(kind=FailureKind.bad_status, status_code=status, body=body)

        try:
            payload = HelloResponse.model_validate_json(body)
        except ValidationError as e:
            # Covers both malformed JSON and a well-formed object of the wrong shape.
            self._log.error(
                "invalid backend response format",
                statusCode=status,
                body=body[:LOG_BODY_LIMIT],
                errors=e.error_count(),
            )
            return Failure(
                kind=FailureKind.invalid_payload,
                status_code=status,
                body=body,
                detail="Invalid response format",
            )

        self._log.debug("backend call successful", statusCode=status)
        return Success(payload=payload)


# --- Module Notes -----------------------------------------------------------
# The resolver owns the `httpx.AsyncClient` lifetime (`async with` per invocation);
# this class only borrows it.
