"""
customer_intel.services

Service layer package.

Responsibilities:
- Compose orchestrator, draft scheduler and clipboard into one panel session.
"""

# Package marker.
