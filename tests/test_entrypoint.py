from __future__ import annotations

from types import SimpleNamespace

import pytest

from trace_gateway.resolver import entrypoint
from trace_gateway.settings import get_settings

CONTEXT = SimpleNamespace(aws_request_id="test-request-id-12345", function_name="trace-gateway")


@pytest.fixture(autouse=True)
def _fresh_process(monkeypatch: pytest.MonkeyPatch):
    for name in ("ALB_ENDPOINT", "API_PATH", "GATEWAY_TIMEOUT_MS", "GATEWAY_ENV"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    entrypoint.get_handler.cache_clear()
    yield
    get_settings.cache_clear()
    entrypoint.get_handler.cache_clear()


def _event(field_name: str) -> dict:
    return {
        "typeName": "Query",
        "fieldName": field_name,
        "arguments": {},
        "identity": None,
        "source": None,
        "request": {"headers": {}, "domainName": None},
        "prev": None,
        "stash": {},
    }


def test_unsupported_field() -> None:
    result = entrypoint.handler(_event("unsupportedField"), CONTEXT)

    assert result["errorType"] == "InvalidField"
    assert result["message"] == "Unsupported field: unsupportedField"


def test_missing_endpoint() -> None:
    result = entrypoint.handler(_event("getHello"), CONTEXT)

    assert result["errorType"] == "InternalError"
    assert "ALB_ENDPOINT" in result["message"]


def test_malformed_event() -> None:
    result = entrypoint.handler({"typeName": "Query"}, CONTEXT)

    assert result == {"message": "Malformed invocation event", "errorType": "InternalError"}


def test_handler_is_built_once() -> None:
    assert entrypoint.get_handler() is entrypoint.get_handler()


@pytest.mark.parametrize("field_name", ["getHello", "unsupportedField"])
@pytest.mark.parametrize(
    ("env_name", "value", "loc"),
    [("GATEWAY_TIMEOUT_MS", "-1", "timeout_ms"), ("GATEWAY_ENV", "staging", "env")],
)
def test_invalid_process_settings_are_internal_error(
    monkeypatch: pytest.MonkeyPatch, log_capture, field_name, env_name, value, loc
) -> None:
    monkeypatch.setenv(env_name, value)

    result = entrypoint.handler(_event(field_name), CONTEXT)

    assert result == {"message": f"Invalid configuration: {loc}", "errorType": "InternalError"}
    [entry] = log_capture.entries
    assert entry["level"] == "ERROR"
    assert entry["message"] == "configuration error"
    assert entry["invocationId"] == "test-request-id-12345"


def test_fixed_settings_recover_without_restart(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GATEWAY_TIMEOUT_MS", "-1")
    assert entrypoint.handler(_event("unsupportedField"), CONTEXT)["errorType"] == "InternalError"

    monkeypatch.delenv("GATEWAY_TIMEOUT_MS")
    assert entrypoint.handler(_event("unsupportedField"), CONTEXT)["errorType"] == "InvalidField"


def test_lenient_carried_fields() -> None:
    event = _event("unsupportedField") | {
        "arguments": None,
        "stash": None,
        "identity": "anonymous",
        "request": {"headers": {"x-retry": 1, "x-flags": ["a"]}, "domainName": 42},
    }

    result = entrypoint.handler(event, CONTEXT)

    assert result["errorType"] == "InvalidField"


@pytest.mark.parametrize("event", [{"typeName": "Query"}, {"fieldName": 7}, {"fieldName": None}])
def test_missing_or_non_string_field_name_is_malformed(event) -> None:
    result = entrypoint.handler(event, CONTEXT)

    assert result == {"message": "Malformed invocation event", "errorType": "InternalError"}
