"""
customer_intel.directory_clients.http

HTTP client boundary used by the orchestrator to query the customer directory.

Responsibilities:
- Look up a customer profile by email (`GET /users?email=`).
- List a customer's posts (`GET /posts?userId=`), capped to a limit in received order.
- Bound every call by a fixed timeout and classify failures into `AppError`.
"""

from __future__ import annotations

import asyncio
from typing import Any

import httpx
from pydantic import ValidationError

from customer_intel.models import CustomerPost, CustomerProfile
from customer_intel.observability.logging import email_domain, get_logger
from customer_intel.orchestrator.errors import AppError
from customer_intel.settings import Settings

log = get_logger(__name__)


class CustomerDirectoryClient:
    """
    Single attempt per call: no retries or backoff here. Every retry is triggered
    explicitly by the orchestrator.
    """

    def __init__(self, *, settings: Settings, http: httpx.AsyncClient) -> None:
        self._settings = settings
        self._http = http
        self._timeout = settings.directory_timeout_seconds

    async def lookup_by_email(self, email: str) -> CustomerProfile | None:
        # Directory answers with a list; first match wins, empty list means "no such customer".
        users = await self._get_list("/users", params={"email": email})
        log.info("directory_lookup", email_domain=email_domain(email), matches=len(users))
        if not users:
            return None
        try:
            return CustomerProfile.model_validate(users[0])
        except ValidationError as e:
            raise AppError(f"Malformed customer record: {e.error_count()} error(s)", "unknown", True) from e

    async def list_posts(self, customer_id: int, *, limit: int = 3) -> list[CustomerPost]:
        posts = await self._get_list("/posts", params={"userId": customer_id})
        log.info("directory_posts", customer_id=customer_id, received=len(posts), limit=limit)
        try:
            return [CustomerPost.model_validate(p) for p in posts[: max(limit, 0)]]
        except ValidationError as e:
            raise AppError(f"Malformed post record: {e.error_count()} error(s)", "unknown", True) from e

    async def _get_list(self, path: str, *, params: dict[str, Any]) -> list[Any]:
        try:
            # asyncio bounds the whole exchange; httpx timeouts are per phase only.
            r = await asyncio.wait_for(self._http.get(path, params=params), timeout=self._timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            log.warning("directory_timeout", path=path, timeout_s=self._timeout)
            raise AppError("Request timeout", "network", True) from e
        except httpx.HTTPError as e:
            log.warning("directory_transport_error", path=path, error=str(e))
            raise AppError(str(e) or type(e).__name__, "network", True) from e
        except Exception as e:
            # e.g. a closed client or a transport raising outside httpx's hierarchy.
            log.warning("directory_unexpected_error", path=path, error_type=type(e).__name__)
            raise AppError(str(e) or "Unknown error occurred", "unknown", True) from e

        if not r.is_success:
            log.warning("directory_http_error", path=path, status_code=r.status_code)
            raise AppError(f"HTTP {r.status_code}: {r.reason_phrase}", "network", True)

        try:
            body = r.json()
        except ValueError as e:
            raise AppError("Directory returned an unreadable response", "unknown", True) from e
        if not isinstance(body, list):
            raise AppError("Directory returned an unexpected response shape", "unknown", True)
        return body


# --- Module Notes -----------------------------------------------------------
# The base URL lives on the injected httpx.AsyncClient (see `api.app`), so tests can
# hand in a client over `httpx.MockTransport` without touching settings.
