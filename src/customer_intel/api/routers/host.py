"""
customer_intel.api.routers.host

Host-context ingestion.

Responsibilities:
- Let the embedding host push the current ticket's context, which completes the
  in-process handshake the panel is waiting on.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from customer_intel.api.deps import in_process_host_dep
from customer_intel.host.bridge import (
    DESCRIPTION_PATH,
    EMAIL_PATH,
    SUBJECT_PATH,
    InProcessHostClient,
)

router = APIRouter(prefix="/v1/host", tags=["host"])


class HostContextRequest(BaseModel):
    requester_email: str = ""
    subject: str = ""
    description: str = ""


@router.post("/context")
async def push_context(
    body: HostContextRequest,
    client: InProcessHostClient = Depends(in_process_host_dep),
) -> dict[str, str]:
    client.accept(
        {
            EMAIL_PATH: body.requester_email,
            SUBJECT_PATH: body.subject,
            DESCRIPTION_PATH: body.description,
        }
    )
    return {"status": "accepted"}


# --- Module Notes -----------------------------------------------------------
# A context pushed after the handshake is picked up by the next refresh, not applied live.
