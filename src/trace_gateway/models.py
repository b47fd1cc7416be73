"""
trace_gateway.models

Inbound invocation and backend payload models.

Responsibilities:
- Parse the AppSync direct-resolver event into an immutable `Invocation`.
- Describe the Lambda execution metadata the resolver logs.
- Define the backend `HelloResponse` payload and its strict validation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator


def _dict_or_empty(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


class InvocationRequest(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    # Header values are carried as received; AppSync does not guarantee strings.
    headers: dict[str, Any] = Field(default_factory=dict)
    domain_name: str | None = Field(default=None, alias="domainName")

    @field_validator("headers", mode="before")
    @classmethod
    def _headers(cls, value: Any) -> dict[str, Any]:
        return _dict_or_empty(value)

    @field_validator("domain_name", mode="before")
    @classmethod
    def _domain_name(cls, value: Any) -> str | None:
        return value if isinstance(value, str) else None


class Invocation(BaseModel):
    """
    AppSync direct-resolver event.
    Only `field_name` is consulted by the resolver; the rest is carried for logging
    and accepted in whatever shape it arrives.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type_name: str = Field(default="Query", alias="typeName")
    field_name: StrictStr = Field(alias="fieldName")
    arguments: dict[str, Any] = Field(default_factory=dict)
    identity: Any = None
    source: Any = None
    request: InvocationRequest = Field(default_factory=InvocationRequest)
    prev: Any = None
    stash: dict[str, Any] = Field(default_factory=dict)

    @field_validator("type_name", mode="before")
    @classmethod
    def _type_name(cls, value: Any) -> str:
        return value if isinstance(value, str) else "Query"

    @field_validator("arguments", "stash", mode="before")
    @classmethod
    def _carried_dicts(cls, value: Any) -> dict[str, Any]:
        return _dict_or_empty(value)

    @field_validator("request", mode="before")
    @classmethod
    def _request(cls, value: Any) -> Any:
        return value if isinstance(value, InvocationRequest) else _dict_or_empty(value)


@dataclass(frozen=True, slots=True)
class ExecutionMeta:
    request_id: str
    function_name: str | None = None

    @classmethod
    def from_lambda_context(cls, context: Any) -> ExecutionMeta:
        # Lambda context objects expose snake_case attributes; tests pass simple stand-ins.
        return cls(
            request_id=str(getattr(context, "aws_request_id", None) or "unknown"),
            function_name=getattr(context, "function_name", None),
        )


class HelloResponse(BaseModel):
    # Extra backend fields are kept so the resolver returns the payload verbatim.
    model_config = ConfigDict(frozen=True, extra="allow")

    # StrictStr: a numeric message or timestamp is a shape mismatch, not something to coerce.
    message: StrictStr
    timestamp: StrictStr


# --- Module Notes -----------------------------------------------------------
# `HelloResponse` is shared by the gateway client (validation) and the dev backend
# (serialization) so both sides agree on the wire shape.
