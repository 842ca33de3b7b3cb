"""
governance_core.orchestrator.core

The governance orchestrator.

Responsibilities:
- Sequence collaborator calls for the four public operations.
- Partition failures: cost lookup during evaluation is best-effort, analytics
  outcome is discarded, everything else is fatal and stage-wrapped.
- Combine partial results into a single decision object.

The orchestrator holds only the adapter collection it was built with, so one
instance can serve concurrent callers without synchronization.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Coroutine, Mapping
from datetime import UTC, datetime, timedelta
from typing import Any, TypeVar

import structlog

from governance_core.adapters.base import (
    AdapterCollection,
    AnalyticsEvent,
    GovernanceEvent,
    PolicyEvaluationRequest,
)
from governance_core.errors import (
    AuditEmissionError,
    CollaboratorError,
    FinOpsSummaryError,
    GovernanceEvaluationError,
    RBACResolutionError,
)
from governance_core.models import (
    AuditSignal,
    FinOpsSummary,
    GovernanceDecision,
    GovernanceRequest,
    PolicyEvaluationResult,
    RBACContext,
)
from governance_core.observability.logging import get_logger
from governance_core.orchestrator.budget import classify_budget

log = get_logger(__name__)

ANALYTICS_EVENT_NAME = "governance.evaluation"
AUDIT_SIGNAL_SCHEMA_ID = "audit.signal.v1"
AUDIT_EVENT_TYPE = "audit.signal"
FINOPS_WINDOW = timedelta(days=30)
FORECAST_HORIZON_DAYS = 30

T = TypeVar("T")


class GovernanceCore:
    def __init__(self, adapters: AdapterCollection) -> None:
        self._adapters = adapters

    @property
    def adapters(self) -> AdapterCollection:
        return self._adapters

    # --- evaluate ------------------------------------------------------------

    async def evaluate_governance(self, request: GovernanceRequest) -> GovernanceDecision:
        """
        Policy -> cost (best-effort) -> analytics (outcome discarded) -> audit.

        Each step feeds the next, so the order is fixed.
        """

        with structlog.contextvars.bound_contextvars(governance_request_id=request.request_id):
            try:
                return await self._evaluate(request)
            except Exception as e:
                log.error("governance_evaluation_failed", error=str(e))
                raise GovernanceEvaluationError(e) from e

    async def _evaluate(self, request: GovernanceRequest) -> GovernanceDecision:
        policy_results = await self._evaluate_policy(request)
        cost_impact = await self._cost_impact(request.resource_id)
        await self._track_evaluation(request, policy_results)

        audit_id = make_audit_id(request.request_id)
        signal = AuditSignal(
            timestamp=_iso_now(),
            action=request.action,
            principal=request.principal,
            resource=request.resource_id,
            outcome="allowed" if policy_results.allowed else "denied",
            metadata={
                "requestId": request.request_id,
                "policies": policy_results.policies,
                "reasons": policy_results.reasons,
            },
        )
        await self.emit_audit_signal(signal)

        log.info(
            "governance_evaluated",
            allowed=policy_results.allowed,
            audit_id=audit_id,
            cost_impact=cost_impact is not None,
        )
        return GovernanceDecision(
            request_id=request.request_id,
            allowed=policy_results.allowed,
            policy_results=policy_results,
            cost_impact=cost_impact,
            audit_id=audit_id,
        )

    async def _evaluate_policy(self, request: GovernanceRequest) -> PolicyEvaluationResult:
        response = await self._adapters.policy_engine.evaluate_policy(
            PolicyEvaluationRequest(
                principal=request.principal,
                action=request.action,
                resource=request.resource_id,
                context=dict(request.context or {}),
            )
        )
        if not response.success or response.data is None:
            message = "Policy evaluation failed"
            raise CollaboratorError(f"{message}: {response.error}" if response.error else message)

        verdict = response.data
        return PolicyEvaluationResult(
            allowed=verdict.allowed,
            policies=list(verdict.applied_policies),
            reasons=list(verdict.reasons),
        )

    async def _cost_impact(self, resource_id: str) -> FinOpsSummary | None:
        try:
            return await self.get_finops_summary(resource_id)
        except FinOpsSummaryError as e:
            # Cost data is supplementary to the decision.
            log.warning("cost_lookup_failed", resource_id=resource_id, error=str(e))
            return None

    async def _track_evaluation(
        self, request: GovernanceRequest, policy_results: PolicyEvaluationResult
    ) -> None:
        event = AnalyticsEvent(
            event_name=ANALYTICS_EVENT_NAME,
            timestamp=datetime.now(tz=UTC),
            properties={
                "requestId": request.request_id,
                "resourceId": request.resource_id,
                "action": request.action,
                "principal": request.principal,
                "allowed": policy_results.allowed,
            },
            user_id=request.principal,
        )
        try:
            tracked = await self._adapters.analytics_hub.track(event)
        except Exception as e:
            log.warning("analytics_track_failed", error=str(e))
            return
        if not tracked.success:
            log.warning("analytics_track_failed", error=tracked.error)

    # --- RBAC ----------------------------------------------------------------

    async def resolve_rbac(self, principal: str) -> RBACContext:
        try:
            return await self._resolve_rbac(principal)
        except Exception as e:
            raise RBACResolutionError(e) from e

    async def _resolve_rbac(self, principal: str) -> RBACContext:
        found = await self._adapters.config_manager.get_config(f"rbac.roles.{principal}")
        if not found.success or found.data is None or found.data.value is None:
            # Unknown principals resolve to an empty, valid context.
            log.info("rbac_unknown_principal", principal=principal)
            return RBACContext(principal=principal)

        value = _config_mapping(found.data.key, found.data.value)
        roles = _string_list(value.get("roles"), what=f"{found.data.key}.roles")
        scope = value.get("scope")

        permission_sets = await _fan_out(*(self._role_permissions(role) for role in roles))
        # Results come back in role order, so the union below is deterministic.
        permissions = list(dict.fromkeys(p for perms in permission_sets for p in perms))

        log.info("rbac_resolved", principal=principal, roles=len(roles), permissions=len(permissions))
        return RBACContext(
            principal=principal,
            roles=roles,
            permissions=permissions,
            scope=scope if isinstance(scope, str) else None,
        )

    async def _role_permissions(self, role: str) -> list[str]:
        found = await self._adapters.config_manager.get_config(f"rbac.permissions.{role}")
        if not found.success or found.data is None or found.data.value is None:
            return []
        value = _config_mapping(found.data.key, found.data.value)
        return _string_list(value.get("permissions"), what=f"{found.data.key}.permissions")

    # --- FinOps --------------------------------------------------------------

    async def get_finops_summary(self, resource_id: str) -> FinOpsSummary:
        try:
            return await self._finops_summary(resource_id)
        except Exception as e:
            raise FinOpsSummaryError(e) from e

    async def _finops_summary(self, resource_id: str) -> FinOpsSummary:
        cost_ops = self._adapters.cost_ops
        end = datetime.now(tz=UTC)
        start = end - FINOPS_WINDOW

        metrics_resp, forecast_resp = await _fan_out(
            cost_ops.get_cost_metrics(start_date=start, end_date=end, services=[resource_id]),
            cost_ops.get_forecast(horizon=FORECAST_HORIZON_DAYS, services=[resource_id]),
        )
        current_cost = metrics_resp.require("Failed to get cost metrics").total_cost
        forecast = forecast_resp.require("Failed to get cost forecast").projected_cost

        summary = FinOpsSummary(
            resource_id=resource_id,
            current_cost=current_cost,
            forecast=forecast,
            budget_status=classify_budget(current_cost, forecast),
        )
        log.info("finops_summary", resource_id=resource_id, budget_status=summary.budget_status)
        return summary

    # --- audit ---------------------------------------------------------------

    async def emit_audit_signal(self, signal: AuditSignal) -> None:
        try:
            await self._emit_audit_signal(signal)
        except Exception as e:
            raise AuditEmissionError(e) from e

    async def _emit_audit_signal(self, signal: AuditSignal) -> None:
        payload = signal.to_payload()

        validation = await self._adapters.schema_registry.validate(AUDIT_SIGNAL_SCHEMA_ID, payload)
        if not validation.success or validation.data is None or not validation.data.valid:
            messages = [issue.message for issue in validation.data.errors] if validation.data else []
            if not messages and validation.error:
                messages = [validation.error]
            raise CollaboratorError(f"Audit signal validation failed: {', '.join(messages)}")

        published = await self._adapters.dashboard.publish_event(
            GovernanceEvent(
                event_type=AUDIT_EVENT_TYPE,
                severity="warning" if signal.outcome == "denied" else "info",
                timestamp=_parse_timestamp(signal.timestamp),
                details=payload,
            )
        )
        if not published.success:
            raise CollaboratorError(published.error or "Dashboard publish failed")

        log.info("audit_signal_emitted", outcome=signal.outcome, resource=signal.resource)


async def _fan_out(*calls: Coroutine[Any, Any, T]) -> list[T]:
    """
    Run `calls` concurrently and return their results in call order.

    If any call raises, the others are cancelled and awaited before the first
    failure propagates, so no lookup outlives the operation that started it.
    """

    try:
        async with asyncio.TaskGroup() as tg:
            tasks = [tg.create_task(call) for call in calls]
    except BaseExceptionGroup as eg:
        raise eg.exceptions[0] from None
    return [task.result() for task in tasks]


def create_governance_core(adapters: AdapterCollection) -> GovernanceCore:
    return GovernanceCore(adapters)


def make_audit_id(request_id: str) -> str:
    # Millisecond resolution: two calls for one request id in the same ms collide.
    return f"audit-{request_id}-{time.time_ns() // 1_000_000}"


def _iso_now() -> str:
    return datetime.now(tz=UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _parse_timestamp(raw: str) -> datetime:
    parsed = datetime.fromisoformat(raw)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _config_mapping(key: str, value: Any) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise CollaboratorError(f"config value for {key} must be an object")
    return value


def _string_list(raw: Any, *, what: str) -> list[str]:
    if raw is None:
        return []
    if not isinstance(raw, list) or not all(isinstance(item, str) for item in raw):
        raise CollaboratorError(f"{what} must be a list of strings")
    return list(raw)


# --- Module Notes -----------------------------------------------------------
# No retries, caching or deadlines are applied here; collaborators own those.
