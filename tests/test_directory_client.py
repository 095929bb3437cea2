"""
tests.test_directory_client

Directory client contract: first-match lookup, capped posts, and error classification.
"""

from __future__ import annotations

import httpx
import pytest

from customer_intel.directory_clients.http import CustomerDirectoryClient
from customer_intel.orchestrator.errors import AppError
from fakes import ERVIN, LEANNE, FakeDirectory, make_posts, make_settings


@pytest.mark.asyncio
async def test_lookup_returns_first_match(directory: FakeDirectory) -> None:
    directory.users = [LEANNE, {**LEANNE, "id": 99, "name": "Duplicate"}]
    async with directory.client() as http:
        client = CustomerDirectoryClient(settings=make_settings(), http=http)
        profile = await client.lookup_by_email("Sincere@april.biz")

    assert profile is not None
    assert profile.id == 1
    assert profile.name == "Leanne Graham"
    assert profile.company.name == "Romaguera-Crona"
    assert profile.address.city == "Gwenborough"
    assert directory.requests == [("/users", {"email": "Sincere@april.biz"})]


@pytest.mark.asyncio
async def test_lookup_without_match_is_absent_not_error(directory: FakeDirectory) -> None:
    async with directory.client() as http:
        client = CustomerDirectoryClient(settings=make_settings(), http=http)
        assert await client.lookup_by_email("nobody@example.com") is None


@pytest.mark.asyncio
async def test_lookup_encodes_email_query(directory: FakeDirectory) -> None:
    directory.users = [{**ERVIN, "email": "a+b@c.com"}]
    async with directory.client() as http:
        client = CustomerDirectoryClient(settings=make_settings(), http=http)
        profile = await client.lookup_by_email("a+b@c.com")

    assert profile is not None and profile.id == 2
    assert directory.requests[0][1] == {"email": "a+b@c.com"}


@pytest.mark.asyncio
async def test_lookup_tolerates_missing_optional_fields(directory: FakeDirectory) -> None:
    directory.users = [{"id": 5, "email": "bare@x.io"}]
    async with directory.client() as http:
        client = CustomerDirectoryClient(settings=make_settings(), http=http)
        profile = await client.lookup_by_email("bare@x.io")

    assert profile is not None
    assert profile.name == ""
    assert profile.company.name == ""
    assert profile.address.city == ""
    assert profile.website == ""


@pytest.mark.asyncio
async def test_list_posts_caps_and_preserves_upstream_order() -> None:
    directory = FakeDirectory(posts=make_posts(1, [5, 3, 9, 1, 7, 2]))
    async with directory.client() as http:
        client = CustomerDirectoryClient(settings=make_settings(), http=http)
        posts = await client.list_posts(1, limit=3)

    assert [p.id for p in posts] == [5, 3, 9]
    assert all(p.customer_id == 1 for p in posts)
    assert directory.requests == [("/posts", {"userId": "1"})]


@pytest.mark.asyncio
@pytest.mark.parametrize("limit", [0, 1, 3, 50])
async def test_list_posts_never_exceeds_limit(directory: FakeDirectory, limit: int) -> None:
    async with directory.client() as http:
        client = CustomerDirectoryClient(settings=make_settings(), http=http)
        posts = await client.list_posts(1, limit=limit)

    assert len(posts) == min(limit, 10)


@pytest.mark.asyncio
async def test_non_success_status_is_retryable_network_error(directory: FakeDirectory) -> None:
    directory.fail_status["/users"] = 503
    async with directory.client() as http:
        client = CustomerDirectoryClient(settings=make_settings(), http=http)
        with pytest.raises(AppError) as exc:
            await client.lookup_by_email("Sincere@april.biz")

    assert exc.value.kind == "network"
    assert exc.value.retryable is True
    assert exc.value.message == "HTTP 503: Service Unavailable"


@pytest.mark.asyncio
async def test_timeout_is_retryable_network_error(directory: FakeDirectory) -> None:
    directory.delay["/posts"] = 0.5
    async with directory.client() as http:
        client = CustomerDirectoryClient(
            settings=make_settings(directory_timeout_seconds=0.05), http=http
        )
        with pytest.raises(AppError) as exc:
            await client.list_posts(1)

    assert exc.value.kind == "network"
    assert exc.value.retryable is True
    assert str(exc.value) == "Request timeout"


@pytest.mark.asyncio
async def test_transport_failure_is_retryable_network_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with httpx.AsyncClient(
        transport=httpx.MockTransport(handler), base_url="http://directory.test"
    ) as http:
        client = CustomerDirectoryClient(settings=make_settings(), http=http)
        with pytest.raises(AppError) as exc:
            await client.lookup_by_email("a@b.com")

    assert exc.value.kind == "network"
    assert exc.value.retryable is True
    assert "connection refused" in exc.value.message


@pytest.mark.asyncio
async def test_unreadable_body_is_unknown_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>not json</html>")

    async with httpx.AsyncClient(
        transport=httpx.MockTransport(handler), base_url="http://directory.test"
    ) as http:
        client = CustomerDirectoryClient(settings=make_settings(), http=http)
        with pytest.raises(AppError) as exc:
            await client.lookup_by_email("a@b.com")

    assert exc.value.kind == "unknown"
    assert exc.value.retryable is True


@pytest.mark.asyncio
async def test_unclassified_transport_exception_is_unknown_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise ValueError("boom")

    async with httpx.AsyncClient(
        transport=httpx.MockTransport(handler), base_url="http://directory.test"
    ) as http:
        client = CustomerDirectoryClient(settings=make_settings(), http=http)
        with pytest.raises(AppError) as exc:
            await client.lookup_by_email("a@b.com")

    assert exc.value.kind == "unknown"
    assert exc.value.retryable is True
    assert exc.value.message == "boom"
    assert isinstance(exc.value.__cause__, ValueError)


@pytest.mark.asyncio
async def test_closed_client_is_unknown_error(directory: FakeDirectory) -> None:
    async with directory.client() as http:
        client = CustomerDirectoryClient(settings=make_settings(), http=http)

    with pytest.raises(AppError) as exc:
        await client.list_posts(1)

    assert exc.value.kind == "unknown"
    assert exc.value.retryable is True
    assert directory.requests == []
