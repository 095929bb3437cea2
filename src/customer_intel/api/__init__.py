"""
customer_intel.api

HTTP presentation adapter package.

Responsibilities:
- FastAPI app factory, routers, and dependency wiring.
"""

# Package marker.
