"""
trace_gateway.backend.__main__

Runs the hello backend locally: `python -m trace_gateway.backend`.

Responsibilities:
- Serve `/api/hello` on `GATEWAY_BACKEND_HOST`:`GATEWAY_BACKEND_PORT` as a stand-in for the ALB target.
- Reuse the resolver's settings and JSON logging so both sides log the same shape.
"""

from __future__ import annotations

import uvicorn

from trace_gateway.backend.app import create_app
from trace_gateway.settings import get_settings


def main() -> None:
    settings = get_settings()
    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.backend_host,
        port=settings.backend_port,
        log_config=None,  # keep uvicorn from replacing the structlog setup
    )


if __name__ == "__main__":
    main()


# --- Module Notes -----------------------------------------------------------
# Local loop: start this module, then invoke the resolver with
# ALB_ENDPOINT=http://localhost:8080 and API_PATH=/api/hello. Requests that carry
# X-Amzn-Trace-Id are logged under the caller's trace id.
