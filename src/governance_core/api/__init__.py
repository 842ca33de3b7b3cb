"""
governance_core.api

HTTP surface for the governance core.

Responsibilities:
- FastAPI app factory and router modules.
- Liveness/service metadata endpoints for platform health checks.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Governance operations are reached through the CLI or by embedding the core;
# this surface only reports service health.
