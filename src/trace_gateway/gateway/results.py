"""
trace_gateway.gateway.results

Tagged result of a single backend call.

Responsibilities:
- Represent the outcome as `Success | Failure` instead of raised exceptions.
- Carry enough detail (status, body, cause) for the resolver's error envelope.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

from trace_gateway.models import HelloResponse


class FailureKind(enum.StrEnum):
    network_error = "NetworkError"
    bad_status = "BadStatus"
    invalid_payload = "InvalidPayload"
    timeout = "Timeout"


@dataclass(frozen=True, slots=True)
class Success:
    payload: HelloResponse


@dataclass(frozen=True, slots=True)
class Failure:
    kind: FailureKind
    status_code: int | None = None
    body: str | None = None
    detail: str | None = None

    @property
    def message(self) -> str:
        if self.kind is FailureKind.bad_status:
            return f"Backend returned status {self.status_code}"
        if self.kind is FailureKind.invalid_payload:
            return self.detail or "Invalid response format"
        if self.kind is FailureKind.timeout:
            return self.detail or "Timeout"
        return f"Network error: {self.detail or 'unknown'}"

    def error_info(self) -> dict[str, Any]:
        info: dict[str, Any] = {"kind": str(self.kind)}
        if self.status_code is not None:
            info["statusCode"] = self.status_code
        if self.body is not None:
            info["body"] = self.body
        return info


BackendResult = Success | Failure


# --- Module Notes -----------------------------------------------------------
# All four failure kinds are dependency-caused and surface as `BackendError`.
