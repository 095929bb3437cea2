"""
customer_intel.directory_clients

Customer directory client package.

Responsibilities:
- Provide the only network boundary of the panel: profile and post lookups.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The orchestrator depends on this boundary, never on httpx directly.
