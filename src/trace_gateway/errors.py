"""
trace_gateway.errors

Error taxonomy and the caller-facing error envelope.

Responsibilities:
- Define the `errorType` values returned to the resolver caller.
- Define domain exceptions raised inside the resolver (configuration defects).
- Build error envelopes in a single place so every path returns the same shape.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any


class ErrorType(enum.StrEnum):
    # Values are part of the GraphQL contract; clients switch on them.
    invalid_field = "InvalidField"
    internal_error = "InternalError"
    backend_error = "BackendError"


class ConfigurationError(Exception):
    """
    Raised when required settings are missing or invalid.
    Always surfaces to the caller as `InternalError`, never as `BackendError`.
    """


@dataclass(frozen=True, slots=True)
class ErrorEnvelope:
    message: str
    error_type: ErrorType
    error_info: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"message": self.message, "errorType": str(self.error_type)}
        if self.error_info:
            out["errorInfo"] = dict(self.error_info)
        return out


def error_envelope(
    message: str,
    error_type: ErrorType,
    error_info: dict[str, Any] | None = None,
) -> dict[str, Any]:
    return ErrorEnvelope(message=message, error_type=error_type, error_info=error_info or {}).as_dict()


# --- Module Notes -----------------------------------------------------------
# Success payloads never pass through this module; the resolver returns them verbatim.
