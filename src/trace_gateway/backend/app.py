"""
trace_gateway.backend.app

FastAPI app factory for the dev hello backend.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Provide the service the resolver calls in local runs and integration tests.
"""

from __future__ import annotations

from fastapi import FastAPI

from trace_gateway.backend.routers.health import router as health_router
from trace_gateway.backend.routers.hello import router as hello_router
from trace_gateway.observability.logging import StructuredLogger, configure_logging
from trace_gateway.observability.middleware import TraceContextMiddleware
from trace_gateway.settings import Settings
from trace_gateway.tracing import TraceContextProvider


def create_app(*, settings: Settings, configure_logs: bool = True) -> FastAPI:
    if configure_logs:
        configure_logging(service_name=f"{settings.service_name}-backend", level=settings.log_level)

    app = FastAPI(
        title="Trace Gateway Hello Backend",
        version="0.1.0",
        docs_url="/docs",
        openapi_url="/openapi.json",
    )

    # The backend only sees traces continued by the middleware; no env fallback here.
    trace = TraceContextProvider(env_fallback=False)
    app.state.logger = StructuredLogger("trace_gateway.backend", trace=trace)

    app.add_middleware(TraceContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(hello_router)

    return app


# --- Module Notes -----------------------------------------------------------
# Stands in for the backend service behind the ALB; the resolver treats it as an
# opaque HTTPS endpoint.
