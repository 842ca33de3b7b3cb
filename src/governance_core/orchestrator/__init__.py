"""
governance_core.orchestrator

Orchestration package.

Responsibilities:
- The `GovernanceCore` pipelines (evaluate, RBAC, FinOps, audit).
- Pure helpers the pipelines rely on (budget classification, audit ids).
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Call sites should go through `governance_core.handlers` so inputs are validated first.
