"""
customer_intel.services.panel_service

One agent's panel session: the seam the presentation layer talks to.

Responsibilities:
- Start the fetch chain and expose refresh/retry.
- Recompute the reply draft whenever ticket, profile, posts or tone change.
- Copy the current draft to the clipboard on demand.
- Render a JSON-ready view of every resource and the draft.
"""

from __future__ import annotations

import asyncio
import dataclasses
from typing import Any

from customer_intel.clipboard import ClipboardBridge
from customer_intel.composer.reply import ReplyComposer, Tone
from customer_intel.composer.scheduler import DraftScheduler
from customer_intel.directory_clients.http import CustomerDirectoryClient
from customer_intel.host.bridge import HostTicketSource
from customer_intel.observability.logging import get_logger
from customer_intel.orchestrator.orchestrator import DataOrchestrator, posts_or_empty
from customer_intel.orchestrator.state import (
    Failed,
    Loading,
    Ready,
    Resource,
    ResourceState,
    ready_value,
)
from customer_intel.settings import Settings

log = get_logger(__name__)


class PanelService:
    def __init__(
        self,
        *,
        settings: Settings,
        host: HostTicketSource,
        directory: CustomerDirectoryClient,
        clipboard: ClipboardBridge | None = None,
        composer: ReplyComposer | None = None,
    ) -> None:
        self._settings = settings
        self._host = host
        self._clipboard = clipboard or ClipboardBridge()
        self.tone: Tone = settings.default_tone
        self.drafts = DraftScheduler(
            composer=composer or ReplyComposer(),
            delay=settings.draft_delay_seconds,
        )
        self.orchestrator = DataOrchestrator(
            host=host,
            directory=directory,
            posts_limit=settings.posts_limit,
            on_change=self._on_resource_change,
        )
        self._background: set[asyncio.Task[None]] = set()

    # --- lifecycle -----------------------------------------------------------

    async def start(self) -> None:
        await self.orchestrator.initialize()

    def start_in_background(self) -> asyncio.Task[None]:
        return self._spawn(self.start())

    async def drain(self) -> None:
        """Wait for in-flight chain work and the pending draft."""

        while self._background:
            await asyncio.gather(*list(self._background), return_exceptions=True)
        await self.drafts.wait()

    async def close(self) -> None:
        for task in list(self._background):
            task.cancel()
        await asyncio.gather(*list(self._background), return_exceptions=True)
        self.drafts.cancel()
        # Drop a handshake still waiting on the host.
        self._host.reset()

    # --- agent actions -------------------------------------------------------

    async def refresh_all(self) -> None:
        log.info("refresh_all")
        await self.orchestrator.refresh_all()

    async def retry(self, resource: Resource | str) -> None:
        log.info("retry", resource=Resource(resource).value)
        await self.orchestrator.retry(resource)

    def set_tone(self, tone: Tone) -> None:
        if tone == self.tone:
            return
        self.tone = tone
        self._maybe_schedule_draft()

    def regenerate(self) -> bool:
        return self._maybe_schedule_draft()

    def copy_reply(self) -> bool:
        draft = self.drafts.latest
        if draft is None or not draft.text or self.orchestrator.fatal:
            return False
        return self._clipboard.copy(draft.text)

    def spawn(self, coro) -> asyncio.Task[None]:
        # Lets HTTP handlers answer immediately while the chain keeps running.
        return self._spawn(coro)

    # --- draft recomputation -------------------------------------------------

    def _on_resource_change(self, resource: Resource, state: ResourceState) -> None:
        log.debug("panel_resource_changed", resource=resource.value, status=state.status)
        self._maybe_schedule_draft()

    def _maybe_schedule_draft(self) -> bool:
        orch = self.orchestrator
        if (
            not isinstance(orch.ticket, Ready)
            or isinstance(orch.customer, Loading)
            or isinstance(orch.posts, Loading)
        ):
            # Inputs are in flux; whatever was pending would be stale.
            self.drafts.cancel()
            return False
        self.drafts.schedule(
            orch.ticket.value,
            ready_value(orch.customer),
            posts_or_empty(orch.posts),
            self.tone,
        )
        return True

    # --- view ----------------------------------------------------------------

    def view(self) -> dict[str, Any]:
        orch = self.orchestrator
        draft = self.drafts.latest
        return {
            "initialized": orch.initialized,
            "fatal": orch.fatal,
            "ticket": _resource_view(orch.ticket),
            "customer": _resource_view(orch.customer),
            "posts": _resource_view(orch.posts),
            "draft": {
                # A fatal view shows no draft.
                "text": draft.text if draft is not None and not orch.fatal else "",
                "tone": self.tone,
                "generating": self.drafts.pending,
            },
        }

    def _spawn(self, coro) -> asyncio.Task[None]:
        task = asyncio.create_task(coro)
        self._background.add(task)
        task.add_done_callback(self._finished)
        return task

    def _finished(self, task: asyncio.Task[None]) -> None:
        self._background.discard(task)
        if not task.cancelled() and task.exception() is not None:
            log.error("panel_task_failed", exc_info=task.exception())


def _resource_view(state: ResourceState) -> dict[str, Any]:
    out: dict[str, Any] = {"status": state.status, "value": None, "error": None}
    if isinstance(state, Ready):
        out["value"] = _jsonable(state.value)
    elif isinstance(state, Failed):
        out["error"] = state.error.to_dict()
    return out


def _jsonable(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, list):
        return [_jsonable(v) for v in value]
    if hasattr(value, "model_dump"):
        return value.model_dump()
    return dataclasses.asdict(value)


# --- Module Notes -----------------------------------------------------------
# The orchestrator notifies synchronously on every transition; scheduling a draft only
# creates a task, so the notification never blocks the fetch chain.
