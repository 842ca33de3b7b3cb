"""
governance_core.adapters

Collaborator boundary.

Responsibilities:
- Adapter contracts (protocols + payload types + result envelope).
- HTTP implementations for deployed collaborators.
- Static in-process collaborators for offline use.
"""

from governance_core.adapters.base import (
    AdapterCollection,
    AdapterResponse,
    AnalyticsHubAdapter,
    ConfigManagerAdapter,
    CostOpsAdapter,
    DashboardAdapter,
    PolicyEngineAdapter,
    SchemaRegistryAdapter,
)

__all__ = [
    "AdapterCollection",
    "AdapterResponse",
    "AnalyticsHubAdapter",
    "ConfigManagerAdapter",
    "CostOpsAdapter",
    "DashboardAdapter",
    "PolicyEngineAdapter",
    "SchemaRegistryAdapter",
]


# --- Module Notes -----------------------------------------------------------
# The orchestrator depends on the protocols only, never on httpx directly.
