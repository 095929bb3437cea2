"""
customer_intel.orchestrator.errors

Error taxonomy shared by the directory client, host bridge and orchestrator.

Responsibilities:
- `AppError`: the one exception type converted into a `Failed` resource state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ErrorKind = Literal["network", "not_found", "host", "unknown"]


@dataclass(eq=False)
class AppError(Exception):
    """
    Classified, user-presentable failure scoped to a single resource.
    A `host` error on the ticket resource is fatal for the whole view.
    """

    message: str
    kind: ErrorKind = "unknown"
    retryable: bool = False

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, object]:
        return {"message": self.message, "kind": self.kind, "retryable": self.retryable}


# --- Module Notes -----------------------------------------------------------
# Anything that is not an AppError is a programming error and propagates unchanged.
