"""
governance_core.api.routers

Router modules for the HTTP surface.
"""

# Package marker.
