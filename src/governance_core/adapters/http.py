"""
governance_core.adapters.http

httpx-backed collaborator clients.

Responsibilities:
- Call each deployed collaborator over JSON/HTTP with service credentials.
- Convert transport errors, HTTP errors and malformed payloads into
  unsuccessful `AdapterResponse` envelopes (single attempt, no retries).
- Build an `AdapterCollection` from settings.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Any
from urllib.parse import quote

import httpx

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
    ValidationResult,
)
from governance_core.adapters.credentials import ServiceCredentials
from governance_core.observability.logging import get_logger
from governance_core.settings import Settings

log = get_logger(__name__)

Parser = Callable[[Any], Any]


class HttpCollaborator:
    """
    Shared plumbing for one collaborator reachable at `base_url`.

    The `httpx.AsyncClient` is owned by the caller so connection pools can be
    shared across all six collaborators.
    """

    audience = "collaborator"

    def __init__(
        self,
        *,
        base_url: str,
        http: httpx.AsyncClient,
        credentials: ServiceCredentials,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._http = http
        self._credentials = credentials

    async def _call(
        self,
        method: str,
        path: str,
        *,
        body: Any = None,
        params: dict[str, str] | None = None,
        parse: Parser | None = None,
    ) -> AdapterResponse:
        try:
            r = await self._http.request(
                method,
                f"{self._base_url}{path}",
                json=body,
                params=params,
                headers=self._credentials.headers(audience=self.audience),
            )
            r.raise_for_status()
            data = parse(r.json()) if parse is not None else None
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            log.warning(
                "collaborator_http_error",
                collaborator=self.audience,
                path=path,
                status_code=status,
            )
            if status == 404:
                return AdapterResponse.fail("not found", metadata={"status_code": status})
            return AdapterResponse.fail(
                _error_detail(e.response) or f"{self.audience} returned HTTP {status}",
                metadata={"status_code": status},
            )
        except httpx.HTTPError as e:
            log.warning("collaborator_unreachable", collaborator=self.audience, path=path)
            return AdapterResponse.fail(f"{self.audience} unreachable: {e}")
        except ValueError as e:
            # Undecodable JSON or a payload that does not match the contract.
            return AdapterResponse.fail(f"{self.audience} returned an invalid payload: {e}")
        return AdapterResponse.ok(data)


class HttpPolicyEngine(HttpCollaborator):
    audience = "policy-engine"

    async def evaluate_policy(
        self, request: PolicyEvaluationRequest
    ) -> AdapterResponse[PolicyVerdict]:
        return await self._call(
            "POST",
            "/v1/policies/evaluate",
            body=request.to_payload(),
            parse=PolicyVerdict.model_validate,
        )

    async def validate_policy(self, definition: dict[str, Any]) -> AdapterResponse[PolicyValidation]:
        return await self._call(
            "POST",
            "/v1/policies/validate",
            body=definition,
            parse=PolicyValidation.model_validate,
        )

    async def refresh_policies(self) -> AdapterResponse[None]:
        return await self._call("POST", "/v1/policies/refresh")


class HttpCostOps(HttpCollaborator):
    audience = "cost-ops"

    async def get_cost_metrics(
        self,
        *,
        start_date: datetime,
        end_date: datetime,
        services: list[str] | None = None,
        group_by: list[str] | None = None,
    ) -> AdapterResponse[CostMetrics]:
        body: dict[str, Any] = {
            "startDate": start_date.isoformat(),
            "endDate": end_date.isoformat(),
        }
        if services is not None:
            body["services"] = services
        if group_by is not None:
            body["groupBy"] = group_by
        return await self._call(
            "POST", "/v1/costs/metrics", body=body, parse=CostMetrics.model_validate
        )

    async def get_forecast(
        self, *, horizon: int, services: list[str] | None = None
    ) -> AdapterResponse[CostForecast]:
        body: dict[str, Any] = {"horizon": horizon}
        if services is not None:
            body["services"] = services
        return await self._call(
            "POST", "/v1/costs/forecast", body=body, parse=CostForecast.model_validate
        )

    async def report_usage(self, usage: UsageReport) -> AdapterResponse[None]:
        return await self._call("POST", "/v1/costs/usage", body=usage.to_payload())


class HttpAnalyticsHub(HttpCollaborator):
    audience = "analytics-hub"

    async def track(self, event: AnalyticsEvent) -> AdapterResponse[None]:
        return await self._call("POST", "/v1/events", body=event.to_payload())

    async def track_batch(self, events: list[AnalyticsEvent]) -> AdapterResponse[None]:
        return await self._call(
            "POST", "/v1/events/batch", body={"events": [e.to_payload() for e in events]}
        )

    async def query(self, query: AnalyticsQuery) -> AdapterResponse[dict[str, Any]]:
        return await self._call("POST", "/v1/query", body=query.to_payload(), parse=_mapping)


class HttpConfigManager(HttpCollaborator):
    audience = "config-manager"

    async def get_config(self, key: str) -> AdapterResponse[ConfigValue]:
        return await self._call(
            "GET", f"/v1/config/{quote(key, safe='')}", parse=ConfigValue.model_validate
        )

    async def get_secret(self, name: str) -> AdapterResponse[str]:
        return await self._call(
            "GET", f"/v1/secrets/{quote(name, safe='')}", parse=_secret_value
        )


class HttpSchemaRegistry(HttpCollaborator):
    audience = "schema-registry"

    async def validate(self, schema_id: str, data: Any) -> AdapterResponse[ValidationResult]:
        return await self._call(
            "POST",
            f"/v1/schemas/{quote(schema_id, safe='')}/validate",
            body={"data": data},
            parse=ValidationResult.model_validate,
        )

    async def get_schema(
        self, schema_id: str, version: str | None = None
    ) -> AdapterResponse[SchemaDefinition]:
        return await self._call(
            "GET",
            f"/v1/schemas/{quote(schema_id, safe='')}",
            params={"version": version} if version else None,
            parse=SchemaDefinition.model_validate,
        )

    async def register_schema(self, schema: SchemaDefinition) -> AdapterResponse[SchemaRef]:
        return await self._call(
            "POST", "/v1/schemas", body=schema.to_payload(), parse=SchemaRef.model_validate
        )


class HttpDashboard(HttpCollaborator):
    audience = "dashboard"

    async def publish_event(self, event: GovernanceEvent) -> AdapterResponse[None]:
        return await self._call("POST", "/v1/events", body=event.to_payload())

    async def publish_metrics(self, metrics: DashboardMetrics) -> AdapterResponse[None]:
        return await self._call("POST", "/v1/metrics", body=metrics.to_payload())

    async def get_health_status(self) -> AdapterResponse[HealthStatus]:
        return await self._call("GET", "/v1/health", parse=HealthStatus.model_validate)


def build_http_adapters(*, settings: Settings, http: httpx.AsyncClient) -> AdapterCollection:
    credentials = ServiceCredentials.from_settings(settings)

    def kw(base_url: str) -> dict[str, Any]:
        return {"base_url": base_url, "http": http, "credentials": credentials}

    return AdapterCollection(
        policy_engine=HttpPolicyEngine(**kw(settings.policy_engine_url)),
        cost_ops=HttpCostOps(**kw(settings.cost_ops_url)),
        analytics_hub=HttpAnalyticsHub(**kw(settings.analytics_hub_url)),
        config_manager=HttpConfigManager(**kw(settings.config_manager_url)),
        schema_registry=HttpSchemaRegistry(**kw(settings.schema_registry_url)),
        dashboard=HttpDashboard(**kw(settings.dashboard_url)),
    )


def _mapping(body: Any) -> dict[str, Any]:
    if not isinstance(body, dict):
        raise ValueError("expected a JSON object")
    return body


def _secret_value(body: Any) -> str:
    value = _mapping(body).get("value")
    if not isinstance(value, str):
        raise ValueError("secret value must be a string")
    return value


def _error_detail(response: httpx.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return None


# --- Module Notes -----------------------------------------------------------
# Timeouts come from the shared AsyncClient (`adapter_timeout_seconds`); a timed
# out call surfaces as an unsuccessful envelope like any other transport error.
