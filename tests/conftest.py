from __future__ import annotations

import pytest

from fakes import FakeDirectory, FakeHostClient


@pytest.fixture
def directory() -> FakeDirectory:
    return FakeDirectory()


@pytest.fixture
def host_client() -> FakeHostClient:
    return FakeHostClient()
