"""
customer_intel.orchestrator.state

Tagged per-resource state used by the data orchestrator.

Responsibilities:
- Define `NotStarted | Loading | Ready[T] | Failed` so "loading and failed at once"
  cannot be represented.
- Name the three resources of the fetch chain.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from customer_intel.orchestrator.errors import AppError

T = TypeVar("T")


class Resource(str, enum.Enum):
    ticket = "ticket"
    customer = "customer"
    posts = "posts"


@dataclass(frozen=True, slots=True)
class NotStarted:
    status = "not_started"


@dataclass(frozen=True, slots=True)
class Loading:
    status = "loading"


@dataclass(frozen=True, slots=True)
class Ready(Generic[T]):
    value: T
    status = "ready"


@dataclass(frozen=True, slots=True)
class Failed:
    error: AppError
    status = "failed"


ResourceState = NotStarted | Loading | Ready[Any] | Failed

NOT_STARTED = NotStarted()
LOADING = Loading()


def ready_value(state: ResourceState, default: Any = None) -> Any:
    # Value held by a Ready state, else `default`.
    if isinstance(state, Ready):
        return state.value
    return default


# --- Module Notes -----------------------------------------------------------
# `status` is a plain class attribute (not a dataclass field) so it shows up in the
# presentation layer's JSON without being part of equality or construction.
