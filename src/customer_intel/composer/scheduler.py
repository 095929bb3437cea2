"""
customer_intel.composer.scheduler

Delayed draft recomputation where the latest trigger wins.

Responsibilities:
- Schedule a compose after a short presentation delay.
- Cancel any still-pending compose when a newer trigger arrives.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence

from customer_intel.composer.reply import ReplyComposer, ReplyDraft, Tone
from customer_intel.models import CustomerPost, CustomerProfile, TicketRecord
from customer_intel.observability.logging import get_logger

log = get_logger(__name__)


class DraftScheduler:
    def __init__(
        self,
        *,
        composer: ReplyComposer,
        delay: float = 0.3,
    ) -> None:
        self._composer = composer
        self._delay = delay
        self._task: asyncio.Task[ReplyDraft] | None = None
        self.latest: ReplyDraft | None = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def schedule(
        self,
        ticket: TicketRecord,
        profile: CustomerProfile | None,
        posts: Sequence[CustomerPost],
        tone: Tone,
    ) -> asyncio.Task[ReplyDraft]:
        self.cancel()
        # Inputs are captured now; a later trigger replaces this task rather than mutating it.
        self._task = asyncio.create_task(self._run(ticket, profile, tuple(posts), tone))
        return self._task

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
            log.debug("draft_superseded")
        self._task = None

    async def wait(self) -> ReplyDraft | None:
        """Wait for the pending compose, if any, and return the latest draft."""

        # A superseded task finishes as cancelled; keep following the newest one.
        while self._task is not None and not self._task.done():
            await asyncio.wait({self._task})
        return self.latest

    async def _run(
        self,
        ticket: TicketRecord,
        profile: CustomerProfile | None,
        posts: tuple[CustomerPost, ...],
        tone: Tone,
    ) -> ReplyDraft:
        if self._delay > 0:
            await asyncio.sleep(self._delay)
        draft = self._composer.compose(ticket, profile, posts, tone)
        self.latest = draft
        log.info("draft_ready", tone=tone, length=len(draft.text))
        return draft


# --- Module Notes -----------------------------------------------------------
# The delay is presentation pacing only; `ReplyComposer.compose` itself is synchronous.
