"""
customer_intel.api.routers.panel

Panel endpoints consumed by the embedded UI.

Responsibilities:
- Expose the per-resource state and the current reply draft.
- Accept refresh / retry / tone / regenerate / copy actions from the agent.
"""

from __future__ import annotations

from typing import Any, Literal

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from starlette.status import HTTP_202_ACCEPTED, HTTP_404_NOT_FOUND

from customer_intel.api.deps import panel_dep
from customer_intel.orchestrator.state import Resource
from customer_intel.services.panel_service import PanelService

router = APIRouter(prefix="/v1/panel", tags=["panel"])


class ToneRequest(BaseModel):
    tone: Literal["friendly", "concise"]


class CopyResponse(BaseModel):
    copied: bool


@router.get("")
async def get_panel(panel: PanelService = Depends(panel_dep)) -> dict[str, Any]:
    return panel.view()


@router.post("/refresh", status_code=HTTP_202_ACCEPTED)
async def refresh_panel(panel: PanelService = Depends(panel_dep)) -> dict[str, Any]:
    # Runs in the background: a not-yet-initialized panel may wait on the host handshake.
    panel.spawn(panel.refresh_all())
    return panel.view()


@router.post("/retry/{resource}", status_code=HTTP_202_ACCEPTED)
async def retry_resource(
    resource: str,
    panel: PanelService = Depends(panel_dep),
) -> dict[str, Any]:
    try:
        target = Resource(resource)
    except ValueError:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Unknown resource") from None
    panel.spawn(panel.retry(target))
    return panel.view()


@router.put("/tone")
async def set_tone(body: ToneRequest, panel: PanelService = Depends(panel_dep)) -> dict[str, Any]:
    panel.set_tone(body.tone)
    return panel.view()


@router.post("/regenerate")
async def regenerate(panel: PanelService = Depends(panel_dep)) -> dict[str, Any]:
    panel.regenerate()
    return panel.view()


@router.post("/copy", response_model=CopyResponse)
async def copy_reply(panel: PanelService = Depends(panel_dep)) -> CopyResponse:
    return CopyResponse(copied=panel.copy_reply())
