from __future__ import annotations

from datetime import UTC, datetime

from fastapi import APIRouter, Request

from trace_gateway.models import HelloResponse

router = APIRouter(prefix="/api", tags=["hello"])

GREETING = "Hello World"


def _now_iso() -> str:
    # Millisecond precision with a Z suffix, matching what the resolver's callers display.
    return datetime.now(tz=UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@router.get("/hello", response_model=HelloResponse)
async def hello(request: Request) -> HelloResponse:
    logger = request.app.state.logger
    logger.info("processing hello request", operation="hello")

    response = HelloResponse(message=GREETING, timestamp=_now_iso())
    logger.info("returning hello response", timestamp=response.timestamp)
    return response
