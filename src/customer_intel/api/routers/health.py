"""
customer_intel.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness probe (`/healthz`).
- Provide readiness probe (`/readyz`): ready once the panel has a usable ticket.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from starlette.status import HTTP_503_SERVICE_UNAVAILABLE

from customer_intel.api.deps import panel_dep
from customer_intel.services.panel_service import PanelService

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(panel: PanelService = Depends(panel_dep)):
    orch = panel.orchestrator
    if orch.initialized and not orch.fatal:
        return {"status": "ready"}
    return JSONResponse(
        status_code=HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "fatal" if orch.fatal else "starting"},
    )


# --- Module Notes -----------------------------------------------------------
# Readiness flips back to 503 when the ticket resource fails (fatal view).
