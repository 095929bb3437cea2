"""
customer_intel.api.routers

Router package.

Responsibilities:
- Health probe, panel endpoints, and host-context ingestion.
"""

# Package marker.
