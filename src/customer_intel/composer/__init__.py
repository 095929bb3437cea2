"""
customer_intel.composer

Reply drafting package.

Responsibilities:
- Pure template-based reply synthesis.
- Delayed, latest-trigger-wins recomputation of the draft.
"""

# Package marker.
