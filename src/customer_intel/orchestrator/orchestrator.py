"""
customer_intel.orchestrator.orchestrator

Dependent fetch sequencer for the panel: ticket -> customer profile -> customer posts.

Responsibilities:
- Own one tagged `ResourceState` per resource and every transition between states.
- Decide explicitly, after each stage completes, whether the next stage starts.
- Stamp each load with a per-resource request token and drop stale responses.
- Expose refresh/retry entry points for the presentation layer.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from customer_intel.directory_clients.http import CustomerDirectoryClient
from customer_intel.host.bridge import HostTicketSource
from customer_intel.models import CustomerPost, CustomerProfile, TicketRecord
from customer_intel.observability.logging import email_domain, get_logger
from customer_intel.orchestrator.errors import AppError
from customer_intel.orchestrator.state import (
    LOADING,
    NOT_STARTED,
    Failed,
    Ready,
    Resource,
    ResourceState,
    ready_value,
)

log = get_logger(__name__)

ChangeListener = Callable[[Resource, ResourceState], None]

MAX_POSTS = 3


class DataOrchestrator:
    """
    Stages run strictly one after another on the event loop; there is no fan-out.

    A ticket failure is fatal for the view. Customer and posts failures stay local to
    their resource. A resource whose prerequisite never produced a usable value stays
    `NotStarted` (dependency-skip), which is not a failure.
    """

    def __init__(
        self,
        *,
        host: HostTicketSource,
        directory: CustomerDirectoryClient,
        posts_limit: int = 3,
        on_change: ChangeListener | None = None,
    ) -> None:
        self._host = host
        self._directory = directory
        self._posts_limit = min(posts_limit, MAX_POSTS)
        self._on_change = on_change

        self._states: dict[Resource, ResourceState] = {r: NOT_STARTED for r in Resource}
        self._tokens: dict[Resource, int] = {r: 0 for r in Resource}
        self.initialized = False

    # --- read side -----------------------------------------------------------

    @property
    def ticket(self) -> ResourceState:
        return self._states[Resource.ticket]

    @property
    def customer(self) -> ResourceState:
        return self._states[Resource.customer]

    @property
    def posts(self) -> ResourceState:
        return self._states[Resource.posts]

    @property
    def fatal(self) -> bool:
        return isinstance(self.ticket, Failed)

    def state(self, resource: Resource) -> ResourceState:
        return self._states[resource]

    def snapshot(self) -> dict[str, Any]:
        return {
            "initialized": self.initialized,
            "fatal": self.fatal,
            **{r.value: self._states[r] for r in Resource},
        }

    # --- entry points --------------------------------------------------------

    async def initialize(self) -> None:
        if self._host.is_development_mode():
            log.info("development_mode", note="using simulated ticket")
            self.initialized = True
            await self.load_ticket()
            return

        token = self._begin(Resource.ticket)
        try:
            await self._host.initialize()
        except AppError as e:
            log.error("initialization_failed", kind=e.kind, error=e.message)
            self._settle(Resource.ticket, token, Failed(e))
            return

        self.initialized = True
        await self.load_ticket()

    async def load_ticket(self) -> None:
        token = self._begin(Resource.ticket)
        if self._host.is_development_mode():
            # No handshake happened, so the host is never asked; refresh and retry
            # re-issue the simulated ticket.
            record = self._host.simulated_ticket()
            if self._settle(Resource.ticket, token, Ready(record)):
                await self._after_ticket(record)
            return
        try:
            record = await self._host.get_ticket_data()
        except AppError as e:
            self._settle(Resource.ticket, token, Failed(e))
            return
        if self._settle(Resource.ticket, token, Ready(record)):
            await self._after_ticket(record)

    async def load_customer(self, email: str) -> None:
        token = self._begin(Resource.customer)
        try:
            profile = await self._directory.lookup_by_email(email)
        except AppError as e:
            self._settle(Resource.customer, token, Failed(e))
            return
        if self._settle(Resource.customer, token, Ready(profile)):
            await self._after_customer(profile)

    async def load_posts(self, customer_id: int) -> None:
        token = self._begin(Resource.posts)
        try:
            posts = await self._directory.list_posts(customer_id, limit=self._posts_limit)
        except AppError as e:
            # Failed replaces the previous Ready, so earlier posts are not kept around.
            self._settle(Resource.posts, token, Failed(e))
            return
        self._settle(Resource.posts, token, Ready(posts[: self._posts_limit]))

    async def refresh_all(self) -> None:
        # Advancing the tokens also invalidates responses from the previous chain.
        for resource in (Resource.customer, Resource.posts):
            self._tokens[resource] += 1
            self._set(resource, NOT_STARTED)

        if self.initialized:
            await self.load_ticket()
        else:
            await self.initialize()

    async def retry(self, resource: Resource | str) -> None:
        resource = Resource(resource)
        if resource is Resource.ticket:
            if self.initialized:
                await self.load_ticket()
            else:
                await self.initialize()
            return

        if resource is Resource.customer:
            ticket: TicketRecord | None = ready_value(self.ticket)
            if ticket is None or not ticket.requester_email:
                log.info("retry_skipped", resource=resource.value, reason="no_requester_email")
                return
            await self.load_customer(ticket.requester_email)
            return

        profile: CustomerProfile | None = ready_value(self.customer)
        if profile is None:
            log.info("retry_skipped", resource=resource.value, reason="no_customer_profile")
            return
        await self.load_posts(profile.id)

    # --- sequencing ----------------------------------------------------------

    async def _after_ticket(self, record: TicketRecord) -> None:
        if not record.requester_email:
            log.info("customer_skipped", reason="empty_requester_email")
            return
        log.info("customer_lookup_started", email_domain=email_domain(record.requester_email))
        await self.load_customer(record.requester_email)

    async def _after_customer(self, profile: CustomerProfile | None) -> None:
        if profile is None:
            log.info("posts_skipped", reason="no_matching_customer")
            return
        await self.load_posts(profile.id)

    # --- state transitions ---------------------------------------------------

    def _begin(self, resource: Resource) -> int:
        self._tokens[resource] += 1
        self._set(resource, LOADING)
        return self._tokens[resource]

    def _settle(self, resource: Resource, token: int, state: ResourceState) -> bool:
        if token != self._tokens[resource]:
            log.warning(
                "stale_response_discarded",
                resource=resource.value,
                token=token,
                current_token=self._tokens[resource],
            )
            return False
        self._set(resource, state)
        return True

    def _set(self, resource: Resource, state: ResourceState) -> None:
        self._states[resource] = state
        if isinstance(state, Failed):
            log.warning(
                "resource_failed",
                resource=resource.value,
                kind=state.error.kind,
                error=state.error.message,
            )
        else:
            log.debug("resource_state", resource=resource.value, status=state.status)
        if self._on_change is not None:
            self._on_change(resource, state)


def posts_or_empty(state: ResourceState) -> list[CustomerPost]:
    return list(ready_value(state, default=[]))


# --- Module Notes -----------------------------------------------------------
# The request token closes the overlapping-retry race: only the response to the most
# recent request for a resource may change that resource's state.
