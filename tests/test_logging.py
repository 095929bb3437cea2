from __future__ import annotations

import pytest

from customer_intel.observability.logging import email_domain


@pytest.mark.parametrize(
    ("email", "domain"),
    [("Sincere@april.biz", "april.biz"), ("a@b@c.io", "c.io"), ("no-at-sign", ""), ("", "")],
)
def test_email_domain(email: str, domain: str) -> None:
    assert email_domain(email) == domain
