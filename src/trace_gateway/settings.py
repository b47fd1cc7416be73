"""
trace_gateway.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for the resolver and dev backend.
- Read the two backend coordinates (`ALB_ENDPOINT`, `API_PATH`) under their
  deployment names, without the `GATEWAY_` prefix.
- Offer a cached settings instance for process-wide concerns (logging, uvicorn).
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Env-driven configuration.

    Backend coordinates have no defaults: a deployment without `ALB_ENDPOINT` or
    `API_PATH` is a configuration defect reported by the resolver, not here.
    """

    model_config = SettingsConfigDict(
        env_prefix="GATEWAY_",
        case_sensitive=False,
        populate_by_name=True,
    )

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "trace-gateway"
    log_level: str = "INFO"

    # Backend coordinates (names match the infrastructure stack outputs).
    alb_endpoint: str | None = Field(default=None, validation_alias="ALB_ENDPOINT")
    api_path: str | None = Field(default=None, validation_alias="API_PATH")

    # Outbound call
    timeout_ms: int = Field(default=30000, gt=0)
    verify_tls: bool = True
    user_agent: str = "trace-gateway/0.1.0"

    # Tracing: fall back to the Lambda-provided _X_AMZN_TRACE_ID when no span is active.
    xray_env_fallback: bool = True

    # Dev backend (python -m trace_gateway.backend)
    backend_host: str = "0.0.0.0"
    backend_port: int = 8080


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Process-wide instance; the resolver builds a fresh one per invocation instead.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# `gateway.config.GatewayConfig.from_settings` turns these values into the
# validated per-call configuration.
