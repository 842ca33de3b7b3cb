"""
governance_core.cli

Command-line interface for the governance core.

Usage:
    governance-core evaluate --request '{"requestId": "r1", ...}'
    governance-core rbac --principal user-123
    governance-core finops --resource model:gpt-4
    governance-core audit --signal '{"timestamp": "...", ...}'
    governance-core health

    # Run against canned in-process collaborators instead of HTTP ones
    governance-core --offline evaluate --request '...'

JSON goes to stdout on success. Errors print `Error: <message>` to stderr
and exit 1. Logs go to stderr.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any

import httpx

from governance_core.adapters.base import AdapterCollection
from governance_core.adapters.http import build_http_adapters
from governance_core.adapters.static import build_static_adapters
from governance_core.errors import GovernanceCoreError
from governance_core.handlers import (
    handle_audit_emission,
    handle_finops_query,
    handle_governance_request,
    handle_rbac_resolution,
)
from governance_core.observability.logging import configure_logging
from governance_core.orchestrator.core import GovernanceCore
from governance_core.settings import Settings, get_settings

EXIT_SUCCESS = 0
EXIT_ERROR = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="governance-core",
        description="Governance orchestration over policy, cost, analytics, config, schema and dashboard collaborators",
    )
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Use canned in-process collaborators instead of the configured HTTP ones",
    )
    sub = parser.add_subparsers(dest="command")

    evaluate = sub.add_parser("evaluate", help="Evaluate a governance request")
    evaluate.add_argument("--request", required=True, metavar="JSON")

    rbac = sub.add_parser("rbac", help="Resolve roles and permissions for a principal")
    rbac.add_argument("--principal", required=True, metavar="ID")

    finops = sub.add_parser("finops", help="Summarize cost and forecast for a resource")
    finops.add_argument("--resource", required=True, metavar="ID")

    audit = sub.add_parser("audit", help="Validate and publish an audit signal")
    audit.add_argument("--signal", required=True, metavar="JSON")

    sub.add_parser("health", help="Report dashboard collaborator health")
    return parser


async def execute(args: argparse.Namespace, core: GovernanceCore) -> Any:
    if args.command == "evaluate":
        decision = await handle_governance_request(_load_json(args.request, "--request"), core)
        return decision.to_payload()
    if args.command == "rbac":
        return (await handle_rbac_resolution(args.principal, core)).to_payload()
    if args.command == "finops":
        return (await handle_finops_query(args.resource, core)).to_payload()
    if args.command == "audit":
        signal = await handle_audit_emission(_load_json(args.signal, "--signal"), core)
        return {"emitted": True, "signal": signal.to_payload()}
    if args.command == "health":
        status = await core.adapters.dashboard.get_health_status()
        return status.require("Health check failed").to_payload()
    raise ValueError(f"Unknown command: {args.command}")


async def _run(args: argparse.Namespace, settings: Settings) -> Any:
    if args.offline:
        return await execute(args, GovernanceCore(build_static_adapters()))

    async with httpx.AsyncClient(timeout=settings.adapter_timeout_seconds) as http:
        adapters: AdapterCollection = build_http_adapters(settings=settings, http=http)
        return await execute(args, GovernanceCore(adapters))


def _load_json(raw: str, flag: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"{flag} is not valid JSON: {e.msg}") from e


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_usage(sys.stderr)
        return EXIT_ERROR

    settings = get_settings()
    configure_logging(
        service_name=settings.service_name,
        level=settings.log_level,
        env=settings.env,
        stream=sys.stderr,
    )

    try:
        result = asyncio.run(_run(args, settings))
    except (GovernanceCoreError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    print(json.dumps(result, indent=2))
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
