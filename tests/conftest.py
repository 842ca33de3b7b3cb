"""
tests.conftest

Shared fixtures: recording fake collaborators.

Every fake appends a short tag to `calls` so tests can assert call order across
collaborators, and keeps the payloads it received for inspection.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import pytest

from governance_core.adapters.base import (
    AdapterCollection,
    AdapterResponse,
    AnalyticsEvent,
    AnalyticsQuery,
    ConfigValue,
    CostForecast,
    CostMetrics,
    DashboardMetrics,
    GovernanceEvent,
    HealthStatus,
    PolicyEvaluationRequest,
    PolicyValidation,
    PolicyVerdict,
    SchemaDefinition,
    SchemaRef,
    UsageReport,
    ValidationIssue,
    ValidationResult,
)
from governance_core.orchestrator.core import GovernanceCore

RBAC_CONFIG: dict[str, Any] = {
    "rbac.roles.user-123": {"roles": ["admin", "developer"]},
    "rbac.permissions.admin": {"permissions": ["read", "write", "delete"]},
    "rbac.permissions.developer": {"permissions": ["read", "write"]},
}


@dataclass
class FakeCollaborators:
    calls: list[str] = field(default_factory=list)

    # policy
    allowed: bool = True
    policy_error: str | None = None
    policy_no_data: bool = False
    policy_requests: list[PolicyEvaluationRequest] = field(default_factory=list)

    # cost
    total_cost: float = 100.0
    projected_cost: float = 110.0
    metrics_error: str | None = None
    forecast_error: str | None = None
    cost_queries: list[dict[str, Any]] = field(default_factory=list)

    # analytics
    analytics_error: str | None = None
    analytics_raises: bool = False
    tracked: list[AnalyticsEvent] = field(default_factory=list)
    queries: list[AnalyticsQuery] = field(default_factory=list)
    analytics_data: dict[str, Any] = field(default_factory=lambda: {"requests": 12})

    # config
    config: dict[str, Any] = field(default_factory=lambda: dict(RBAC_CONFIG))
    config_keys: list[str] = field(default_factory=list)

    # schema
    schema_errors: list[str] = field(default_factory=list)
    schema_error: str | None = None
    validated: list[tuple[str, Any]] = field(default_factory=list)

    # dashboard
    publish_error: str | None = None
    published: list[GovernanceEvent] = field(default_factory=list)

    def collection(self) -> AdapterCollection:
        return AdapterCollection(
            policy_engine=_Policy(self),
            cost_ops=_Cost(self),
            analytics_hub=_Analytics(self),
            config_manager=_Config(self),
            schema_registry=_Schema(self),
            dashboard=_Dashboard(self),
        )


class _Policy:
    def __init__(self, world: FakeCollaborators) -> None:
        self.w = world

    async def evaluate_policy(self, request: PolicyEvaluationRequest) -> AdapterResponse:
        self.w.calls.append("policy")
        self.w.policy_requests.append(request)
        if self.w.policy_error is not None:
            return AdapterResponse.fail(self.w.policy_error)
        if self.w.policy_no_data:
            return AdapterResponse.ok()
        return AdapterResponse.ok(
            PolicyVerdict(
                allowed=self.w.allowed,
                reasons=["Read access granted"] if self.w.allowed else ["Action not permitted"],
                applied_policies=["policy-1", "policy-2"],
            )
        )

    async def validate_policy(self, definition: dict[str, Any]) -> AdapterResponse:
        return AdapterResponse.ok(PolicyValidation(valid=True))

    async def refresh_policies(self) -> AdapterResponse:
        return AdapterResponse.ok()


class _Cost:
    def __init__(self, world: FakeCollaborators) -> None:
        self.w = world

    async def get_cost_metrics(
        self,
        *,
        start_date: datetime,
        end_date: datetime,
        services: list[str] | None = None,
        group_by: list[str] | None = None,
    ) -> AdapterResponse:
        self.w.calls.append("cost_metrics")
        self.w.cost_queries.append(
            {"start": start_date, "end": end_date, "services": services}
        )
        if self.w.metrics_error is not None:
            return AdapterResponse.fail(self.w.metrics_error)
        return AdapterResponse.ok(CostMetrics(total_cost=self.w.total_cost, currency="USD"))

    async def get_forecast(self, *, horizon: int, services: list[str] | None = None) -> AdapterResponse:
        self.w.calls.append("forecast")
        self.w.cost_queries.append({"horizon": horizon, "services": services})
        if self.w.forecast_error is not None:
            return AdapterResponse.fail(self.w.forecast_error)
        return AdapterResponse.ok(CostForecast(projected_cost=self.w.projected_cost, confidence=0.9))

    async def report_usage(self, usage: UsageReport) -> AdapterResponse:
        return AdapterResponse.ok()


class _Analytics:
    def __init__(self, world: FakeCollaborators) -> None:
        self.w = world

    async def track(self, event: AnalyticsEvent) -> AdapterResponse:
        self.w.calls.append("track")
        self.w.tracked.append(event)
        if self.w.analytics_raises:
            raise RuntimeError("analytics hub exploded")
        if self.w.analytics_error is not None:
            return AdapterResponse.fail(self.w.analytics_error)
        return AdapterResponse.ok()

    async def track_batch(self, events: list[AnalyticsEvent]) -> AdapterResponse:
        return AdapterResponse.ok()

    async def query(self, query: AnalyticsQuery) -> AdapterResponse:
        self.w.calls.append("query")
        self.w.queries.append(query)
        if self.w.analytics_error is not None:
            return AdapterResponse.fail(self.w.analytics_error)
        return AdapterResponse.ok(self.w.analytics_data)


class _Config:
    def __init__(self, world: FakeCollaborators) -> None:
        self.w = world

    async def get_config(self, key: str) -> AdapterResponse:
        self.w.config_keys.append(key)
        if key not in self.w.config:
            return AdapterResponse.fail("Config not found")
        return AdapterResponse.ok(ConfigValue(key=key, value=self.w.config[key], version="v1"))

    async def get_secret(self, name: str) -> AdapterResponse:
        return AdapterResponse.fail("Secret not found")


class _Schema:
    def __init__(self, world: FakeCollaborators) -> None:
        self.w = world

    async def validate(self, schema_id: str, data: Any) -> AdapterResponse:
        self.w.calls.append("validate")
        self.w.validated.append((schema_id, data))
        if self.w.schema_error is not None:
            return AdapterResponse.fail(self.w.schema_error)
        issues = [ValidationIssue(path="/", message=m) for m in self.w.schema_errors]
        return AdapterResponse.ok(ValidationResult(valid=not issues, errors=issues))

    async def get_schema(self, schema_id: str, version: str | None = None) -> AdapterResponse:
        return AdapterResponse.fail("Schema not found")

    async def register_schema(self, schema: SchemaDefinition) -> AdapterResponse:
        return AdapterResponse.ok(SchemaRef(schema_id=schema.schema_id, version=schema.version))


class _Dashboard:
    def __init__(self, world: FakeCollaborators) -> None:
        self.w = world

    async def publish_event(self, event: GovernanceEvent) -> AdapterResponse:
        self.w.calls.append("publish")
        if self.w.publish_error is not None:
            return AdapterResponse.fail(self.w.publish_error)
        self.w.published.append(event)
        return AdapterResponse.ok()

    async def publish_metrics(self, metrics: DashboardMetrics) -> AdapterResponse:
        return AdapterResponse.ok()

    async def get_health_status(self) -> AdapterResponse:
        return AdapterResponse.ok(HealthStatus(healthy=True))


@pytest.fixture
def world() -> FakeCollaborators:
    return FakeCollaborators()


@pytest.fixture
def core(world: FakeCollaborators) -> GovernanceCore:
    return GovernanceCore(world.collection())


# --- Module Notes -----------------------------------------------------------
# Fakes read their behaviour from the shared `world` at call time, so a test can
# flip e.g. `world.allowed = False` after the `core` fixture has been built.
