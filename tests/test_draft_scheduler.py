"""
tests.test_draft_scheduler

Delayed draft recomputation: the latest trigger wins and superseded work never lands.
"""

from __future__ import annotations

import asyncio

import pytest

from customer_intel.composer.reply import ReplyComposer
from customer_intel.composer.scheduler import DraftScheduler
from customer_intel.models import TicketRecord

TICKET = TicketRecord(requester_email="a@b.com", subject="Help", description="Please help.")


class CountingComposer(ReplyComposer):
    def __init__(self) -> None:
        self.calls: list[str] = []

    def compose(self, ticket, profile, posts, tone="friendly"):
        self.calls.append(tone)
        return super().compose(ticket, profile, posts, tone)


@pytest.mark.asyncio
async def test_latest_trigger_wins() -> None:
    composer = CountingComposer()
    scheduler = DraftScheduler(composer=composer, delay=0.05)

    scheduler.schedule(TICKET, None, [], "friendly")
    scheduler.schedule(TICKET, None, [], "friendly")
    scheduler.schedule(TICKET, None, [], "concise")
    assert scheduler.pending is True

    latest = await scheduler.wait()

    assert latest is not None and latest.tone == "concise"
    assert composer.calls == ["concise"]
    assert scheduler.latest == latest
    assert scheduler.pending is False


@pytest.mark.asyncio
async def test_cancel_drops_pending_draft() -> None:
    composer = CountingComposer()
    scheduler = DraftScheduler(composer=composer, delay=0.02)

    scheduler.schedule(TICKET, None, [], "friendly")
    scheduler.cancel()
    await asyncio.sleep(0.05)

    assert composer.calls == []
    assert scheduler.latest is None
    assert await scheduler.wait() is None


@pytest.mark.asyncio
async def test_wait_follows_a_trigger_that_arrives_while_waiting() -> None:
    composer = CountingComposer()
    scheduler = DraftScheduler(composer=composer, delay=0.03)

    scheduler.schedule(TICKET, None, [], "friendly")
    waiter = asyncio.create_task(scheduler.wait())
    await asyncio.sleep(0.01)
    scheduler.schedule(TICKET, None, [], "concise")

    latest = await waiter
    assert latest is not None and latest.tone == "concise"
    assert composer.calls == ["concise"]


@pytest.mark.asyncio
async def test_zero_delay_still_runs_asynchronously() -> None:
    scheduler = DraftScheduler(composer=ReplyComposer(), delay=0)
    task = scheduler.schedule(TICKET, None, [], "friendly")
    assert scheduler.latest is None

    draft = await task
    assert scheduler.latest == draft
    assert draft.text.startswith("Hi Customer,")
