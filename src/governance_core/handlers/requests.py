"""
governance_core.handlers.requests

Entry points for external callers (CLI, HTTP, embedding applications).
Each handler validates, then delegates to the orchestrator unchanged.
"""

from __future__ import annotations

from typing import Any, Protocol

from governance_core.handlers.validation import (
    validate_audit_signal,
    validate_governance_request,
    validate_identifier,
)
from governance_core.models import (
    AuditSignal,
    FinOpsSummary,
    GovernanceDecision,
    GovernanceRequest,
    RBACContext,
)


class GovernanceOperations(Protocol):
    async def evaluate_governance(self, request: GovernanceRequest) -> GovernanceDecision: ...

    async def resolve_rbac(self, principal: str) -> RBACContext: ...

    async def get_finops_summary(self, resource_id: str) -> FinOpsSummary: ...

    async def emit_audit_signal(self, signal: AuditSignal) -> None: ...


async def handle_governance_request(request: Any, core: GovernanceOperations) -> GovernanceDecision:
    data = validate_governance_request(request)
    return await core.evaluate_governance(GovernanceRequest.model_validate(data))


async def handle_rbac_resolution(principal: Any, core: GovernanceOperations) -> RBACContext:
    return await core.resolve_rbac(validate_identifier(principal, name="principal"))


async def handle_finops_query(resource_id: Any, core: GovernanceOperations) -> FinOpsSummary:
    return await core.get_finops_summary(validate_identifier(resource_id, name="resourceId"))


async def handle_audit_emission(signal: Any, core: GovernanceOperations) -> AuditSignal:
    data = validate_audit_signal(signal)
    parsed = AuditSignal.model_validate(data)
    await core.emit_audit_signal(parsed)
    return parsed
