"""
customer_intel.models

Domain records shared by the host bridge, directory client, orchestrator and composer.

Responsibilities:
- `TicketRecord`: what the host yields for the current ticket.
- `CustomerProfile` / `CustomerPost`: directory wire records (validated with Pydantic).
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True, slots=True)
class TicketRecord:
    """
    Current ticket as seen by the support agent. Replaced only by a manual refresh.
    """

    requester_email: str = ""
    subject: str = ""
    description: str = ""


class _WireModel(BaseModel):
    # Directory records carry many fields we do not use; ignore them.
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


class Company(_WireModel):
    name: str = ""


class Address(_WireModel):
    city: str = ""


class CustomerProfile(_WireModel):
    id: int
    name: str = ""
    email: str = ""
    company: Company = Field(default_factory=Company)
    address: Address = Field(default_factory=Address)
    website: str = ""


class CustomerPost(_WireModel):
    id: int
    customer_id: int = Field(alias="userId")
    title: str = ""
    body: str = ""


# --- Module Notes -----------------------------------------------------------
# `TicketRecord` is a plain dataclass because it never crosses the directory wire;
# the Pydantic models mirror the directory JSON (`userId` is exposed as `customer_id`).
