"""
governance_core.services

Envelope-returning coordination services.

Responsibilities:
- Thin compositions of adapter calls for embedding applications that want
  collaborator-style results (`AdapterResponse`) instead of exceptions.
"""

from governance_core.services.coordination import (
    AuditAggregationService,
    FinOpsOrchestrationService,
    GovernanceMetrics,
    PolicyCoordinationService,
)

__all__ = [
    "AuditAggregationService",
    "FinOpsOrchestrationService",
    "GovernanceMetrics",
    "PolicyCoordinationService",
]
