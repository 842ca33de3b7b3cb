"""
governance_core.adapters.base

Adapter contracts for the six collaborators.

Responsibilities:
- Define the uniform result envelope (`AdapterResponse`).
- Define payload types exchanged with each collaborator.
- Define one async protocol per collaborator and the collection the core holds.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Generic, Literal, Protocol, TypeVar

from pydantic import BaseModel, Field

from governance_core.errors import CollaboratorError
from governance_core.models import WireModel

T = TypeVar("T")

Severity = Literal["info", "warning", "error", "critical"]
SchemaFormat = Literal["json-schema", "protobuf", "avro"]


class AdapterResponse(BaseModel, Generic[T]):
    """
    Two-variant result of a collaborator call: `ok(data)` or `fail(error)`.

    Collaborator calls report failure through this envelope instead of raising;
    the orchestrator decides which failures are fatal.
    """

    success: bool
    data: T | None = None
    error: str | None = None
    metadata: dict[str, Any] | None = None

    @classmethod
    def ok(cls, data: Any = None, *, metadata: dict[str, Any] | None = None) -> AdapterResponse:
        return cls(success=True, data=data, metadata=metadata)

    @classmethod
    def fail(cls, error: str, *, metadata: dict[str, Any] | None = None) -> AdapterResponse:
        return cls(success=False, error=error, metadata=metadata)

    def require(self, default_error: str) -> T:
        if not self.success or self.data is None:
            raise CollaboratorError(self.error or default_error)
        return self.data


# --- Policy ------------------------------------------------------------------


class PolicyEvaluationRequest(WireModel):
    principal: str
    action: str
    resource: str
    context: dict[str, Any] = Field(default_factory=dict)


class PolicyVerdict(WireModel):
    allowed: bool
    reasons: list[str] = Field(default_factory=list)
    applied_policies: list[str] = Field(default_factory=list)
    conditions: dict[str, Any] | None = None


class PolicyValidation(WireModel):
    valid: bool
    errors: list[str] = Field(default_factory=list)


# --- Cost --------------------------------------------------------------------


class Period(WireModel):
    start: datetime
    end: datetime


class CostMetrics(WireModel):
    total_cost: float
    currency: str = "USD"
    period: Period | None = None
    breakdown: dict[str, float] = Field(default_factory=dict)


class CostForecast(WireModel):
    projected_cost: float
    confidence: float | None = None
    period: Period | None = None


class UsageReport(WireModel):
    service: str
    tokens: int
    request_id: str
    timestamp: datetime
    metadata: dict[str, Any] | None = None


# --- Analytics ---------------------------------------------------------------


class AnalyticsEvent(WireModel):
    event_name: str
    timestamp: datetime
    properties: dict[str, Any] = Field(default_factory=dict)
    user_id: str | None = None
    session_id: str | None = None


class AnalyticsQuery(WireModel):
    metric: str
    dimensions: list[str] | None = None
    filters: dict[str, Any] | None = None
    time_range: Period


# --- Configuration -----------------------------------------------------------


class ConfigValue(WireModel):
    key: str
    value: Any = None
    version: str | None = None
    last_updated: datetime | None = None


# --- Schema registry ---------------------------------------------------------


class ValidationIssue(WireModel):
    path: str = ""
    message: str


class ValidationResult(WireModel):
    valid: bool
    errors: list[ValidationIssue] = Field(default_factory=list)


class SchemaDefinition(WireModel):
    schema_id: str
    version: str
    # `schema` shadows a BaseModel attribute, hence the alias.
    definition: dict[str, Any] = Field(default_factory=dict, alias="schema")
    format: SchemaFormat = "json-schema"


class SchemaRef(WireModel):
    schema_id: str
    version: str


# --- Dashboard ---------------------------------------------------------------


class GovernanceEvent(WireModel):
    event_type: str
    severity: Severity
    timestamp: datetime
    details: dict[str, Any] = Field(default_factory=dict)
    correlation_id: str | None = None


class DashboardMetrics(WireModel):
    policy_violations: int
    active_requests: int
    total_cost: float
    uptime_percent: float


class HealthStatus(WireModel):
    healthy: bool
    details: dict[str, Any] = Field(default_factory=dict)


# --- Protocols ---------------------------------------------------------------


class PolicyEngineAdapter(Protocol):
    async def evaluate_policy(
        self, request: PolicyEvaluationRequest
    ) -> AdapterResponse[PolicyVerdict]: ...

    async def validate_policy(
        self, definition: dict[str, Any]
    ) -> AdapterResponse[PolicyValidation]: ...

    async def refresh_policies(self) -> AdapterResponse[None]: ...


class CostOpsAdapter(Protocol):
    async def get_cost_metrics(
        self,
        *,
        start_date: datetime,
        end_date: datetime,
        services: list[str] | None = None,
        group_by: list[str] | None = None,
    ) -> AdapterResponse[CostMetrics]: ...

    async def get_forecast(
        self, *, horizon: int, services: list[str] | None = None
    ) -> AdapterResponse[CostForecast]: ...

    async def report_usage(self, usage: UsageReport) -> AdapterResponse[None]: ...


class AnalyticsHubAdapter(Protocol):
    async def track(self, event: AnalyticsEvent) -> AdapterResponse[None]: ...

    async def track_batch(self, events: list[AnalyticsEvent]) -> AdapterResponse[None]: ...

    async def query(self, query: AnalyticsQuery) -> AdapterResponse[dict[str, Any]]: ...


class ConfigManagerAdapter(Protocol):
    async def get_config(self, key: str) -> AdapterResponse[ConfigValue]: ...

    async def get_secret(self, name: str) -> AdapterResponse[str]: ...


class SchemaRegistryAdapter(Protocol):
    async def validate(self, schema_id: str, data: Any) -> AdapterResponse[ValidationResult]: ...

    async def get_schema(
        self, schema_id: str, version: str | None = None
    ) -> AdapterResponse[SchemaDefinition]: ...

    async def register_schema(self, schema: SchemaDefinition) -> AdapterResponse[SchemaRef]: ...


class DashboardAdapter(Protocol):
    async def publish_event(self, event: GovernanceEvent) -> AdapterResponse[None]: ...

    async def publish_metrics(self, metrics: DashboardMetrics) -> AdapterResponse[None]: ...

    async def get_health_status(self) -> AdapterResponse[HealthStatus]: ...


@dataclass(frozen=True, slots=True)
class AdapterCollection:
    policy_engine: PolicyEngineAdapter
    cost_ops: CostOpsAdapter
    analytics_hub: AnalyticsHubAdapter
    config_manager: ConfigManagerAdapter
    schema_registry: SchemaRegistryAdapter
    dashboard: DashboardAdapter


# --- Module Notes -----------------------------------------------------------
# Config change watching is not part of these contracts: the core never holds
# state across calls, so there is nothing for a change notification to update.
