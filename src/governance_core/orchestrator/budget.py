"""
governance_core.orchestrator.budget

Budget status classification for FinOps summaries.
"""

from __future__ import annotations

from governance_core.models import BudgetStatus

EXCEEDED_RATIO = 1.5
WARNING_RATIO = 1.2


def classify_budget(current_cost: float, forecast: float) -> BudgetStatus:
    # First match wins; both comparisons are strict.
    if forecast > current_cost * EXCEEDED_RATIO:
        return "exceeded"
    if forecast > current_cost * WARNING_RATIO:
        return "warning"
    return "within"
