"""
governance_core.handlers

Boundary request handlers.

Responsibilities:
- Validate the surface shape of caller input (naming the offending field).
- Delegate to the orchestrator once input is known to be well-formed.
"""

from governance_core.handlers.requests import (
    GovernanceOperations,
    handle_audit_emission,
    handle_finops_query,
    handle_governance_request,
    handle_rbac_resolution,
)

__all__ = [
    "GovernanceOperations",
    "handle_audit_emission",
    "handle_finops_query",
    "handle_governance_request",
    "handle_rbac_resolution",
]
