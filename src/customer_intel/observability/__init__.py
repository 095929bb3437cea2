"""
customer_intel.observability

Observability package.

Responsibilities:
- Structured logging configuration.
"""

# Package marker.
