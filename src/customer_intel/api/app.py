"""
customer_intel.api.app

FastAPI app factory for the customer intelligence panel.

Responsibilities:
- Build the FastAPI application and register routers.
- Own the shared directory `httpx.AsyncClient` and the panel session for the app's lifetime.
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from customer_intel.api.routers.health import router as health_router
from customer_intel.api.routers.host import router as host_router
from customer_intel.api.routers.panel import router as panel_router
from customer_intel.clipboard import ClipboardBridge
from customer_intel.directory_clients.http import CustomerDirectoryClient
from customer_intel.host.bridge import HostClient, HostTicketSource, InProcessHostClient
from customer_intel.observability.logging import configure_logging, get_logger
from customer_intel.services.panel_service import PanelService
from customer_intel.settings import Settings

log = get_logger(__name__)


def create_app(
    *,
    settings: Settings,
    directory_transport: httpx.AsyncBaseTransport | None = None,
    host_client: HostClient | None = None,
    clipboard: ClipboardBridge | None = None,
) -> FastAPI:
    # Configure structured logging once at process startup (before app serves requests).
    configure_logging(
        service_name=settings.service_name,
        level=settings.log_level,
        json_logs=settings.env != "dev",
    )

    host_client = host_client or InProcessHostClient()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env, directory=settings.directory_base_url)
        async with httpx.AsyncClient(
            base_url=settings.directory_base_url,
            transport=directory_transport,
            headers={"Content-Type": "application/json"},
        ) as http:
            panel = PanelService(
                settings=settings,
                host=HostTicketSource(settings=settings, client=host_client),
                directory=CustomerDirectoryClient(settings=settings, http=http),
                clipboard=clipboard,
            )
            app.state.panel = panel
            app.state.host_client = host_client
            # The chain may wait up to the handshake timeout; never block startup on it.
            panel.start_in_background()
            try:
                yield
            finally:
                await panel.close()
                log.info("shutdown")

    app = FastAPI(
        title="Customer Intelligence Panel",
        version="0.1.0",
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.include_router(health_router, tags=["health"])
    app.include_router(panel_router)
    app.include_router(host_router)

    return app


# --- Module Notes -----------------------------------------------------------
# One app instance serves one agent's panel session, matching how the host embeds it.
