"""
customer_intel.orchestrator

Dependent data-fetch orchestration (ticket -> customer -> posts).

Responsibilities:
- Per-resource tagged state, error taxonomy, and the sequencing orchestrator.
"""

# Package marker.
