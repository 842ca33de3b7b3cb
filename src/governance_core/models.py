"""
governance_core.models

Request/response value objects exchanged with callers of the core.

Responsibilities:
- Define the governance request, decision, RBAC and FinOps shapes.
- Keep wire names camelCase while Python code uses snake_case attributes.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

BudgetStatus = Literal["within", "warning", "exceeded"]
Outcome = Literal["allowed", "denied"]


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        # Absent optionals are omitted rather than sent as null.
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class GovernanceRequest(WireModel):
    request_id: str
    resource_id: str
    action: str
    principal: str
    context: dict[str, Any] | None = None


class PolicyEvaluationResult(WireModel):
    allowed: bool
    policies: list[str] = Field(default_factory=list)
    reasons: list[str] = Field(default_factory=list)


class FinOpsSummary(WireModel):
    resource_id: str
    current_cost: float
    forecast: float
    budget_status: BudgetStatus


class AuditSignal(WireModel):
    """
    Normalized record of an evaluated action.

    Unknown fields are kept so the schema registry sees everything the caller sent.
    """

    model_config = ConfigDict(**WireModel.model_config, extra="allow")

    timestamp: str
    action: str
    principal: str
    resource: str
    outcome: Outcome
    metadata: dict[str, Any] | None = None


class GovernanceDecision(WireModel):
    request_id: str
    allowed: bool
    policy_results: PolicyEvaluationResult
    cost_impact: FinOpsSummary | None = None
    audit_id: str


class RBACContext(WireModel):
    principal: str
    roles: list[str] = Field(default_factory=list)
    permissions: list[str] = Field(default_factory=list)
    scope: str | None = None


# --- Module Notes -----------------------------------------------------------
# None of these are persisted; each lives for a single operation call.
