"""
trace_gateway.gateway.config

Per-call backend configuration.

Responsibilities:
- Validate the backend coordinates taken from `Settings`.
- Report missing/invalid values as `ConfigurationError` naming the env variable.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from trace_gateway.errors import ConfigurationError
from trace_gateway.settings import Settings


@dataclass(frozen=True, slots=True)
class GatewayConfig:
    """
    Strict policy: both `ALB_ENDPOINT` and `API_PATH` are required; neither has a default.
    `timeout_ms` bounds the whole call, connection setup included.
    """

    base_address: str
    path: str
    timeout_ms: int = 30000

    def __post_init__(self) -> None:
        if not self.base_address:
            raise ConfigurationError("ALB_ENDPOINT environment variable is required")
        if not self.path:
            raise ConfigurationError("API_PATH environment variable is required")
        _check_endpoint(self.base_address)
        if not self.path.startswith("/"):
            raise ConfigurationError("API_PATH must start with '/'")
        if self.timeout_ms <= 0:
            raise ConfigurationError("Timeout must be a positive number of milliseconds")

    @property
    def url(self) -> str:
        return self.base_address.rstrip("/") + self.path

    @classmethod
    def from_settings(cls, settings: Settings) -> GatewayConfig:
        return cls(
            base_address=(settings.alb_endpoint or "").strip(),
            path=(settings.api_path or "").strip(),
            timeout_ms=settings.timeout_ms,
        )


def _check_endpoint(base_address: str) -> None:
    try:
        url = httpx.URL(base_address)
    except httpx.InvalidURL as e:
        raise ConfigurationError(f"ALB_ENDPOINT is not a valid URL: {e}") from e
    if url.scheme not in ("http", "https") or not url.host:
        raise ConfigurationError("ALB_ENDPOINT must be an absolute http(s) URL")


# --- Module Notes -----------------------------------------------------------
# Config errors are operator-caused and map to `InternalError` in the resolver.
