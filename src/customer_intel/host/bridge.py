"""
customer_intel.host.bridge

Ticket source backed by the embedding host platform.

Responsibilities:
- Bound the host handshake by a fixed timeout (fatal for the view when exceeded).
- Read the current ticket's requester email, subject and description.
- Detect a development (non-hosted) context and supply the simulated ticket.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any, Protocol
from urllib.parse import urlsplit

from customer_intel.models import TicketRecord
from customer_intel.observability.logging import get_logger
from customer_intel.orchestrator.errors import AppError
from customer_intel.settings import Settings

log = get_logger(__name__)

EMAIL_PATH = "ticket.requester.email"
SUBJECT_PATH = "ticket.subject"
DESCRIPTION_PATH = "ticket.description"

SIMULATED_TICKET = TicketRecord(
    # Known record in the public placeholder directory.
    requester_email="Sincere@april.biz",
    subject="Test ticket for development",
    description=(
        "This is a simulated ticket for testing the customer intelligence panel "
        "in development mode."
    ),
)


class HostClient(Protocol):
    async def init(self) -> None: ...

    async def get(self, paths: list[str]) -> Mapping[str, Any]: ...


class InProcessHostClient:
    """
    Host client for a host that pushes its ticket context into the service.
    The handshake completes on the first `accept`; later pushes replace the context.
    """

    def __init__(self) -> None:
        self._ready = asyncio.Event()
        self._context: dict[str, Any] = {}

    def accept(self, context: Mapping[str, Any]) -> None:
        self._context = dict(context)
        self._ready.set()

    async def init(self) -> None:
        await self._ready.wait()

    async def get(self, paths: list[str]) -> Mapping[str, Any]:
        return {p: self._context.get(p) for p in paths}


def is_development_context(
    url: str,
    *,
    marker: str = "zat=true",
    hostnames: tuple[str, ...] = ("localhost", "127.0.0.1"),
) -> bool:
    if not url:
        return False
    parts = urlsplit(url)
    return (bool(marker) and marker in parts.query) or (parts.hostname or "") in hostnames


class HostTicketSource:
    def __init__(self, *, settings: Settings, client: HostClient) -> None:
        self._settings = settings
        self._client = client
        self._handshake: asyncio.Task[None] | None = None
        self._connected = False

    def is_development_mode(self) -> bool:
        return is_development_context(
            self._settings.panel_url,
            marker=self._settings.dev_query_marker,
            hostnames=self._settings.dev_hostnames,
        )

    def simulated_ticket(self) -> TicketRecord:
        return SIMULATED_TICKET

    @property
    def connected(self) -> bool:
        return self._connected

    async def initialize(self) -> None:
        """
        Complete the host handshake once. Concurrent callers share the same attempt;
        a failed attempt is forgotten so the next call starts a fresh one.
        """

        if self._connected:
            return
        if self._handshake is None:
            self._handshake = asyncio.ensure_future(self._client.init())

        timeout = self._settings.host_handshake_timeout_seconds
        try:
            await asyncio.wait_for(asyncio.shield(self._handshake), timeout=timeout)
        except asyncio.TimeoutError as e:
            self._abandon_handshake()
            log.error("host_handshake_timeout", timeout_s=timeout)
            raise AppError(
                "Host initialization timeout - make sure the panel is running inside the host",
                "host",
                True,
            ) from e
        except Exception as e:
            self._abandon_handshake()
            log.error("host_handshake_failed", error=str(e))
            raise AppError(f"Host initialization failed: {e}", "host", True) from e

        self._connected = True
        log.info("host_connected")

    async def get_ticket_data(self) -> TicketRecord:
        if not self._connected:
            raise AppError("Host client not initialized - call initialize() first", "host", True)
        try:
            data = await self._client.get([EMAIL_PATH, SUBJECT_PATH, DESCRIPTION_PATH])
        except Exception as e:
            raise AppError(f"Failed to fetch ticket data: {e}", "host", True) from e

        return TicketRecord(
            requester_email=str(data.get(EMAIL_PATH) or ""),
            subject=str(data.get(SUBJECT_PATH) or ""),
            description=str(data.get(DESCRIPTION_PATH) or ""),
        )

    def reset(self) -> None:
        self._abandon_handshake()
        self._connected = False

    def _abandon_handshake(self) -> None:
        if self._handshake is not None and not self._handshake.done():
            self._handshake.cancel()
        self._handshake = None


# --- Module Notes -----------------------------------------------------------
# The handshake protocol itself belongs to the host; this module only consumes the
# `HostClient` surface (`init` + `get`) and what it yields.
