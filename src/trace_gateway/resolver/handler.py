"""
trace_gateway.resolver.handler

Invocation handler for the single supported GraphQL field.

Responsibilities:
- Reject unsupported fields before any configuration load or network I/O.
- Load per-invocation configuration and call the backend through the gateway client.
- Map every outcome (success, typed failure, config defect, unexpected error) to one
  well-shaped response envelope. Nothing escapes `handle`.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx
from pydantic import ValidationError

from trace_gateway.errors import ConfigurationError, ErrorType, error_envelope
from trace_gateway.gateway.client import BackendGatewayClient, GatewayClient, build_http_client
from trace_gateway.gateway.config import GatewayConfig
from trace_gateway.gateway.results import Failure, Success
from trace_gateway.models import ExecutionMeta, Invocation
from trace_gateway.observability.logging import StructuredLogger
from trace_gateway.settings import Settings
from trace_gateway.tracing import TraceContextProvider

SUPPORTED_FIELD = "getHello"

GatewayFactory = Callable[[httpx.AsyncClient, StructuredLogger, Settings], GatewayClient]


def default_gateway_factory(
    http: httpx.AsyncClient, logger: StructuredLogger, settings: Settings
) -> GatewayClient:
    return BackendGatewayClient(http=http, logger=logger, user_agent=settings.user_agent)


class InvocationHandler:
    """
    Resolver composition root.

    Collaborators are injected so each invocation is determined by its explicit inputs:
    - `settings_factory` is called once per invocation (env is re-read every time)
    - `transport` lets tests route the outbound call to a mock or an ASGI app
    """

    def __init__(
        self,
        *,
        trace: TraceContextProvider,
        logger: StructuredLogger,
        settings_factory: Callable[[], Settings] = Settings,
        gateway_factory: GatewayFactory = default_gateway_factory,
        transport: httpx.AsyncBaseTransport | None = None,
        supported_field: str = SUPPORTED_FIELD,
    ) -> None:
        self._trace = trace
        self._log = logger
        self._settings_factory = settings_factory
        self._gateway_factory = gateway_factory
        self._transport = transport
        self._supported_field = supported_field

    @property
    def logger(self) -> StructuredLogger:
        return self._log

    async def handle(self, invocation: Invocation, meta: ExecutionMeta) -> dict[str, Any]:
        self._log.info(
            "resolver invoked",
            operation=invocation.field_name,
            invocationId=meta.request_id,
        )
        try:
            envelope = await self._resolve(invocation)
        except Exception as e:
            # Last line of defense: defects become InternalError, never a raw fault.
            self._log.error("internal error occurred", exc=e, invocationId=meta.request_id)
            envelope = error_envelope(str(e) or "Unknown error", ErrorType.internal_error)

        error_type = envelope.get("errorType")
        self._log.info(
            "resolver completed",
            invocationId=meta.request_id,
            status="failure" if error_type else "success",
            **({"errorType": error_type} if error_type else {}),
        )
        return envelope

    async def _resolve(self, invocation: Invocation) -> dict[str, Any]:
        field_name = invocation.field_name
        if field_name != self._supported_field:
            self._log.error("unsupported field requested", fieldName=field_name)
            return error_envelope(
                f"Unsupported field: {field_name}",
                ErrorType.invalid_field,
                {"fieldName": field_name},
            )

        try:
            settings = self._settings_factory()
            config = GatewayConfig.from_settings(settings)
        except (ConfigurationError, ValidationError) as e:
            self._log.error("configuration error", exc=e)
            return error_envelope(config_error_message(e), ErrorType.internal_error)

        # Snapshot once; the propagation header carries exactly these ids.
        trace_context = self._trace.current()

        async with build_http_client(verify=settings.verify_tls, transport=self._transport) as http:
            gateway = self._gateway_factory(http, self._log, settings)
            result = await gateway.call(config, trace_context)

        if isinstance(result, Success):
            return result.payload.model_dump()
        if isinstance(result, Failure):
            # Already logged at ERROR by the gateway client.
            return error_envelope(
                f"Backend error: {result.message}",
                ErrorType.backend_error,
                result.error_info(),
            )
        raise TypeError(f"unexpected gateway result: {type(result).__name__}")


def config_error_message(e: Exception) -> str:
    if isinstance(e, ValidationError):
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        return f"Invalid configuration: {fields}"
    return str(e)


# --- Module Notes -----------------------------------------------------------
# The Lambda runtime entrypoint lives in `resolver.entrypoint`; this module has no
# knowledge of the raw event dict or the Lambda context object.
