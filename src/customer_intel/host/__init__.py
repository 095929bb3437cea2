"""
customer_intel.host

Host ticketing platform boundary.

Responsibilities:
- Turn whatever the host handshake yields into a `TicketRecord`.
"""

# Package marker.
