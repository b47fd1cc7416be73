"""
trace_gateway.backend.routers.health

Health endpoint.

Responsibilities:
- Serve `/healthz` for the ALB target group health check.
"""

from __future__ import annotations

from fastapi import APIRouter

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    # Liveness: process is up and serving HTTP.
    return {"status": "ok"}


# --- Module Notes -----------------------------------------------------------
# The backend has no dependencies worth a readiness check.
