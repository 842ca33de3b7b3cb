"""
governance_core

Top-level package for the governance coordination layer.

Responsibilities:
- Expose package version metadata.
- Re-export the orchestrator entry points consumers need most often.
"""

__version__ = "1.0.0"

from governance_core.orchestrator.core import GovernanceCore, create_governance_core  # noqa: E402

__all__ = ["GovernanceCore", "__version__", "create_governance_core"]


# --- Module Notes -----------------------------------------------------------
# Adapter contracts live in `governance_core.adapters`; import them from there.
