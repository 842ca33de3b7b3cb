"""
tests.test_cli

CLI commands run in `--offline` mode against the static collaborators.
"""

from __future__ import annotations

import json

import pytest

from governance_core.cli import main

REQUEST = {
    "requestId": "req-cli",
    "resourceId": "model:gpt-4",
    "action": "llm:invoke",
    "principal": "user-123",
}


def _run(capsys: pytest.CaptureFixture[str], *argv: str) -> tuple[int, str, str]:
    code = main(["--offline", *argv])
    out, err = capsys.readouterr()
    return code, out, err


def test_evaluate_prints_decision(capsys: pytest.CaptureFixture[str]) -> None:
    code, out, _ = _run(capsys, "evaluate", "--request", json.dumps(REQUEST))

    assert code == 0
    decision = json.loads(out)
    assert decision["requestId"] == "req-cli"
    assert decision["allowed"] is True
    assert decision["policyResults"]["policies"] == ["default-policy"]
    assert decision["auditId"].startswith("audit-req-cli-")
    # Static cost figures: 42.5 now, 120.0 forecast.
    assert decision["costImpact"]["budgetStatus"] == "exceeded"


def test_evaluate_rejects_invalid_request(capsys: pytest.CaptureFixture[str]) -> None:
    code, out, err = _run(capsys, "evaluate", "--request", json.dumps({**REQUEST, "principal": ""}))

    assert code == 1
    assert out == ""
    assert "Error: Invalid request: principal must be a non-empty string" in err


def test_evaluate_rejects_malformed_json(capsys: pytest.CaptureFixture[str]) -> None:
    code, _, err = _run(capsys, "evaluate", "--request", "{not json")

    assert code == 1
    assert "--request is not valid JSON" in err


def test_rbac_unknown_principal(capsys: pytest.CaptureFixture[str]) -> None:
    code, out, _ = _run(capsys, "rbac", "--principal", "nobody")

    assert code == 0
    assert json.loads(out) == {"principal": "nobody", "roles": [], "permissions": []}


def test_finops_summary(capsys: pytest.CaptureFixture[str]) -> None:
    code, out, _ = _run(capsys, "finops", "--resource", "model:gpt-4")

    assert code == 0
    assert json.loads(out) == {
        "resourceId": "model:gpt-4",
        "currentCost": 42.5,
        "forecast": 120.0,
        "budgetStatus": "exceeded",
    }


def test_audit_emits_signal(capsys: pytest.CaptureFixture[str]) -> None:
    signal = {
        "timestamp": "2025-01-15T10:30:00Z",
        "action": "write",
        "principal": "user-456",
        "resource": "resource-xyz",
        "outcome": "allowed",
    }

    code, out, _ = _run(capsys, "audit", "--signal", json.dumps(signal))

    assert code == 0
    assert json.loads(out) == {"emitted": True, "signal": signal}


def test_health(capsys: pytest.CaptureFixture[str]) -> None:
    code, out, _ = _run(capsys, "health")

    assert code == 0
    assert json.loads(out)["healthy"] is True


def test_missing_command_prints_usage(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 1
    assert "usage:" in capsys.readouterr().err
