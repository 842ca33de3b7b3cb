"""
governance_core.handlers.validation

Shape checks applied before the orchestrator is invoked.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from governance_core.errors import RequestValidationError

GOVERNANCE_REQUEST_FIELDS = ("requestId", "resourceId", "action", "principal")
AUDIT_SIGNAL_FIELDS = ("timestamp", "action", "principal", "resource", "outcome")
AUDIT_OUTCOMES = ("allowed", "denied")


def validate_governance_request(raw: Any) -> dict[str, Any]:
    data = _as_object(raw, prefix="Invalid request")
    for field in GOVERNANCE_REQUEST_FIELDS:
        _require_string(data, field, prefix="Invalid request")
    _optional_object(data, "context", prefix="Invalid request")
    return data


def validate_audit_signal(raw: Any) -> dict[str, Any]:
    data = _as_object(raw, prefix="Invalid audit signal")
    for field in AUDIT_SIGNAL_FIELDS:
        _require_string(data, field, prefix="Invalid audit signal")
    if data["outcome"] not in AUDIT_OUTCOMES:
        raise RequestValidationError(
            "Invalid audit signal: outcome must be one of " + ", ".join(AUDIT_OUTCOMES),
            field="outcome",
        )
    _optional_object(data, "metadata", prefix="Invalid audit signal")
    return data


def validate_identifier(value: Any, *, name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise RequestValidationError(f"Invalid {name}: must be a non-empty string", field=name)
    return value


def _as_object(raw: Any, *, prefix: str) -> dict[str, Any]:
    # Typed models are accepted too; they are checked by their wire names.
    if isinstance(raw, BaseModel):
        raw = raw.model_dump(by_alias=True, exclude_none=True)
    if not isinstance(raw, Mapping):
        raise RequestValidationError(f"{prefix}: must be an object")
    return dict(raw)


def _require_string(data: Mapping[str, Any], field: str, *, prefix: str) -> None:
    value = data.get(field)
    if not isinstance(value, str) or not value.strip():
        raise RequestValidationError(f"{prefix}: {field} must be a non-empty string", field=field)


def _optional_object(data: Mapping[str, Any], field: str, *, prefix: str) -> None:
    if field in data and not isinstance(data[field], Mapping):
        raise RequestValidationError(
            f"{prefix}: {field} must be an object if provided", field=field
        )
