"""
governance_core.adapters.static

In-process collaborators with canned answers.

Responsibilities:
- Let the CLI (`--offline`) and local demos run the real orchestrator without
  any collaborator deployed.
- Serve configuration from a plain mapping so RBAC can be exercised locally.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

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
    Period,
    PolicyEvaluationRequest,
    PolicyValidation,
    PolicyVerdict,
    SchemaDefinition,
    SchemaRef,
    UsageReport,
    ValidationResult,
)

STATIC_CONFIG_VERSION = "static"


class StaticPolicyEngine:
    async def evaluate_policy(
        self, request: PolicyEvaluationRequest
    ) -> AdapterResponse[PolicyVerdict]:
        return AdapterResponse.ok(
            PolicyVerdict(
                allowed=True,
                reasons=["Default allow policy"],
                applied_policies=["default-policy"],
            )
        )

    async def validate_policy(self, definition: dict[str, Any]) -> AdapterResponse[PolicyValidation]:
        return AdapterResponse.ok(PolicyValidation(valid=True))

    async def refresh_policies(self) -> AdapterResponse[None]:
        return AdapterResponse.ok()


class StaticCostOps:
    def __init__(self, *, total_cost: float = 42.5, projected_cost: float = 120.0) -> None:
        self._total_cost = total_cost
        self._projected_cost = projected_cost

    async def get_cost_metrics(
        self,
        *,
        start_date: datetime,
        end_date: datetime,
        services: list[str] | None = None,
        group_by: list[str] | None = None,
    ) -> AdapterResponse[CostMetrics]:
        return AdapterResponse.ok(
            CostMetrics(
                total_cost=self._total_cost,
                currency="USD",
                period=Period(start=start_date, end=end_date),
                breakdown={service: self._total_cost for service in services or []},
            )
        )

    async def get_forecast(
        self, *, horizon: int, services: list[str] | None = None
    ) -> AdapterResponse[CostForecast]:
        return AdapterResponse.ok(CostForecast(projected_cost=self._projected_cost, confidence=0.85))

    async def report_usage(self, usage: UsageReport) -> AdapterResponse[None]:
        return AdapterResponse.ok()


class StaticAnalyticsHub:
    async def track(self, event: AnalyticsEvent) -> AdapterResponse[None]:
        return AdapterResponse.ok()

    async def track_batch(self, events: list[AnalyticsEvent]) -> AdapterResponse[None]:
        return AdapterResponse.ok()

    async def query(self, query: AnalyticsQuery) -> AdapterResponse[dict[str, Any]]:
        return AdapterResponse.ok({})


class StaticConfigManager:
    def __init__(
        self,
        values: Mapping[str, Any] | None = None,
        secrets: Mapping[str, str] | None = None,
    ) -> None:
        self._values = dict(values or {})
        self._secrets = dict(secrets or {})

    async def get_config(self, key: str) -> AdapterResponse[ConfigValue]:
        if key not in self._values:
            return AdapterResponse.fail("Config not found")
        return AdapterResponse.ok(
            ConfigValue(
                key=key,
                value=self._values[key],
                version=STATIC_CONFIG_VERSION,
                last_updated=datetime.now(tz=UTC),
            )
        )

    async def get_secret(self, name: str) -> AdapterResponse[str]:
        if name not in self._secrets:
            return AdapterResponse.fail("Secret not found")
        return AdapterResponse.ok(self._secrets[name])


class StaticSchemaRegistry:
    async def validate(self, schema_id: str, data: Any) -> AdapterResponse[ValidationResult]:
        return AdapterResponse.ok(ValidationResult(valid=True))

    async def get_schema(
        self, schema_id: str, version: str | None = None
    ) -> AdapterResponse[SchemaDefinition]:
        return AdapterResponse.fail("Schema not found")

    async def register_schema(self, schema: SchemaDefinition) -> AdapterResponse[SchemaRef]:
        return AdapterResponse.ok(SchemaRef(schema_id=schema.schema_id, version=schema.version))


class StaticDashboard:
    async def publish_event(self, event: GovernanceEvent) -> AdapterResponse[None]:
        return AdapterResponse.ok()

    async def publish_metrics(self, metrics: DashboardMetrics) -> AdapterResponse[None]:
        return AdapterResponse.ok()

    async def get_health_status(self) -> AdapterResponse[HealthStatus]:
        return AdapterResponse.ok(HealthStatus(healthy=True, details={"mode": "offline"}))


def build_static_adapters(*, config: Mapping[str, Any] | None = None) -> AdapterCollection:
    return AdapterCollection(
        policy_engine=StaticPolicyEngine(),
        cost_ops=StaticCostOps(),
        analytics_hub=StaticAnalyticsHub(),
        config_manager=StaticConfigManager(config),
        schema_registry=StaticSchemaRegistry(),
        dashboard=StaticDashboard(),
    )
