"""
governance_core.errors

Exception hierarchy for the governance core.

Responsibilities:
- Boundary validation errors (raised by handlers before the core runs).
- Stage-prefixed orchestration errors (raised by the core).
- Internal collaborator failures, always wrapped before leaving the core.
"""

from __future__ import annotations


class GovernanceCoreError(Exception):
    pass


class RequestValidationError(GovernanceCoreError, ValueError):
    """
    Raised by request handlers when the surface shape of an input is wrong.
    """

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class CollaboratorError(GovernanceCoreError):
    """
    A collaborator answered with an unsuccessful envelope (or no payload).
    """


class OrchestrationError(GovernanceCoreError):
    stage: str = "Orchestration"

    def __init__(self, cause: BaseException | str) -> None:
        self.cause = cause
        super().__init__(f"{self.stage} failed: {describe(cause)}")


class GovernanceEvaluationError(OrchestrationError):
    stage = "Governance evaluation"


class RBACResolutionError(OrchestrationError):
    stage = "RBAC resolution"


class FinOpsSummaryError(OrchestrationError):
    stage = "FinOps summary"


class AuditEmissionError(OrchestrationError):
    stage = "Audit signal emission"


def describe(cause: BaseException | str) -> str:
    if isinstance(cause, str):
        return cause
    return str(cause) or cause.__class__.__name__


# --- Module Notes -----------------------------------------------------------
# Stage errors nest: an audit failure during evaluation reads
# "Governance evaluation failed: Audit signal emission failed: ...".
