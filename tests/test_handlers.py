"""
tests.test_handlers

Boundary validation performed before the orchestrator is invoked.
"""

from __future__ import annotations

from typing import Any

import pytest

from governance_core.errors import RequestValidationError
from governance_core.handlers import (
    handle_audit_emission,
    handle_finops_query,
    handle_governance_request,
    handle_rbac_resolution,
)
from governance_core.models import AuditSignal, GovernanceRequest


class RecordingCore:
    def __init__(self) -> None:
        self.calls: list[tuple[str, Any]] = []

    async def evaluate_governance(self, request: GovernanceRequest) -> Any:
        self.calls.append(("evaluate", request))
        return "decision"

    async def resolve_rbac(self, principal: str) -> Any:
        self.calls.append(("rbac", principal))
        return "rbac"

    async def get_finops_summary(self, resource_id: str) -> Any:
        self.calls.append(("finops", resource_id))
        return "finops"

    async def emit_audit_signal(self, signal: AuditSignal) -> None:
        self.calls.append(("audit", signal))


def _raw_request(**overrides: Any) -> dict[str, Any]:
    raw: dict[str, Any] = {
        "requestId": "req-1",
        "resourceId": "resource-abc",
        "action": "read",
        "principal": "user-123",
    }
    raw.update(overrides)
    return raw


def _raw_signal(**overrides: Any) -> dict[str, Any]:
    raw: dict[str, Any] = {
        "timestamp": "2025-01-15T10:30:00Z",
        "action": "write",
        "principal": "user-456",
        "resource": "resource-xyz",
        "outcome": "denied",
    }
    raw.update(overrides)
    return raw


@pytest.mark.asyncio
async def test_valid_request_is_delegated() -> None:
    core = RecordingCore()

    result = await handle_governance_request(_raw_request(context={"env": "prod"}), core)

    assert result == "decision"
    (name, request), = core.calls
    assert name == "evaluate"
    assert isinstance(request, GovernanceRequest)
    assert request.request_id == "req-1"
    assert request.context == {"env": "prod"}


@pytest.mark.asyncio
async def test_typed_request_is_accepted() -> None:
    core = RecordingCore()
    typed = GovernanceRequest(request_id="r", resource_id="x", action="read", principal="p")

    await handle_governance_request(typed, core)

    assert core.calls[0][1].principal == "p"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("raw", "field"),
    [
        ({k: v for k, v in _raw_request().items() if k != "requestId"}, "requestId"),
        (_raw_request(resourceId="   "), "resourceId"),
        (_raw_request(action=7), "action"),
        (_raw_request(principal=""), "principal"),
        (_raw_request(context=["a", "b"]), "context"),
        (_raw_request(context=None), "context"),
    ],
)
async def test_invalid_request_names_field(raw: dict[str, Any], field: str) -> None:
    core = RecordingCore()

    with pytest.raises(RequestValidationError) as ei:
        await handle_governance_request(raw, core)

    assert field in str(ei.value)
    assert ei.value.field == field
    assert core.calls == []


@pytest.mark.asyncio
async def test_non_object_request_rejected() -> None:
    with pytest.raises(RequestValidationError, match="must be an object"):
        await handle_governance_request(["not", "a", "mapping"], RecordingCore())


@pytest.mark.asyncio
async def test_rbac_principal_validated() -> None:
    core = RecordingCore()

    assert await handle_rbac_resolution("user-123", core) == "rbac"
    with pytest.raises(RequestValidationError, match="principal"):
        await handle_rbac_resolution("  ", core)
    assert core.calls == [("rbac", "user-123")]


@pytest.mark.asyncio
async def test_finops_resource_validated() -> None:
    core = RecordingCore()

    assert await handle_finops_query("resource-abc", core) == "finops"
    with pytest.raises(RequestValidationError, match="resourceId"):
        await handle_finops_query(None, core)


@pytest.mark.asyncio
async def test_audit_signal_delegated_with_extension_fields() -> None:
    core = RecordingCore()

    signal = await handle_audit_emission(_raw_signal(tenant="acme"), core)

    assert core.calls == [("audit", signal)]
    assert signal.outcome == "denied"
    assert signal.to_payload()["tenant"] == "acme"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("raw", "field"),
    [
        (_raw_signal(timestamp=""), "timestamp"),
        ({k: v for k, v in _raw_signal().items() if k != "resource"}, "resource"),
        (_raw_signal(outcome="maybe"), "outcome"),
        (_raw_signal(metadata=[1, 2]), "metadata"),
    ],
)
async def test_invalid_audit_signal_names_field(raw: dict[str, Any], field: str) -> None:
    core = RecordingCore()

    with pytest.raises(RequestValidationError) as ei:
        await handle_audit_emission(raw, core)

    assert str(ei.value).startswith("Invalid audit signal: ")
    assert field in str(ei.value)
    assert core.calls == []
