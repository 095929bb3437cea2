"""
customer_intel.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for the panel session and the host client.
- Encapsulate app.state access patterns.
"""

from __future__ import annotations

from fastapi import HTTPException, Request
from starlette.status import HTTP_409_CONFLICT

from customer_intel.host.bridge import InProcessHostClient
from customer_intel.services.panel_service import PanelService


def panel_dep(request: Request) -> PanelService:
    # Created in the app lifespan (see `customer_intel.api.app.create_app`).
    return request.app.state.panel  # type: ignore[attr-defined]


def in_process_host_dep(request: Request) -> InProcessHostClient:
    client = request.app.state.host_client  # type: ignore[attr-defined]
    if not isinstance(client, InProcessHostClient):
        raise HTTPException(
            status_code=HTTP_409_CONFLICT,
            detail="Host context is supplied by the configured host client",
        )
    return client
