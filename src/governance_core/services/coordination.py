"""
governance_core.services.coordination

Stateless services composing adapter calls.

Responsibilities:
- Policy coordination: pass a policy query through to the policy engine.
- Audit aggregation: validate a governance event, then publish it.
- FinOps orchestration: combine 30-day cost metrics with usage analytics.

Unlike `GovernanceCore`, these never raise for collaborator failures; they
return an unsuccessful envelope describing which call failed.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

from pydantic import Field

from governance_core.adapters.base import (
    AdapterCollection,
    AdapterResponse,
    AnalyticsQuery,
    CostMetrics,
    GovernanceEvent,
    Period,
    PolicyEvaluationRequest,
    PolicyVerdict,
)
from governance_core.models import WireModel
from governance_core.observability.logging import get_logger

log = get_logger(__name__)

GOVERNANCE_EVENT_SCHEMA_ID = "governance-event"
RESOURCE_USAGE_METRIC = "resource-usage"
METRICS_WINDOW = timedelta(days=30)


class GovernanceMetrics(WireModel):
    cost_metrics: CostMetrics
    analytics_data: dict[str, Any] = Field(default_factory=dict)


class PolicyCoordinationService:
    async def evaluate_request(
        self, request: PolicyEvaluationRequest, adapters: AdapterCollection
    ) -> AdapterResponse[PolicyVerdict]:
        return await adapters.policy_engine.evaluate_policy(request)


class AuditAggregationService:
    async def record_decision(
        self, event: GovernanceEvent, adapters: AdapterCollection
    ) -> AdapterResponse[None]:
        validation = await adapters.schema_registry.validate(
            GOVERNANCE_EVENT_SCHEMA_ID, event.to_payload()
        )
        if not validation.success or validation.data is None or not validation.data.valid:
            errors = validation.data.errors if validation.data else []
            log.warning("governance_event_rejected", event_type=event.event_type, errors=len(errors))
            detail = ", ".join(issue.message for issue in errors) or (validation.error or "")
            return AdapterResponse.fail(f"Schema validation failed: {detail}")
        return await adapters.dashboard.publish_event(event)


class FinOpsOrchestrationService:
    async def get_governance_metrics(
        self, resource_id: str, adapters: AdapterCollection
    ) -> AdapterResponse[GovernanceMetrics]:
        end = datetime.now(tz=UTC)
        start = end - METRICS_WINDOW

        cost = await adapters.cost_ops.get_cost_metrics(
            start_date=start, end_date=end, services=[resource_id]
        )
        if not cost.success or cost.data is None:
            return AdapterResponse.fail(f"Failed to fetch cost metrics: {cost.error}")

        usage = await adapters.analytics_hub.query(
            AnalyticsQuery(
                metric=RESOURCE_USAGE_METRIC,
                dimensions=["resourceId"],
                filters={"resourceId": resource_id},
                time_range=Period(start=start, end=end),
            )
        )
        if not usage.success or usage.data is None:
            return AdapterResponse.fail(f"Failed to fetch analytics: {usage.error}")

        return AdapterResponse.ok(GovernanceMetrics(cost_metrics=cost.data, analytics_data=usage.data))
