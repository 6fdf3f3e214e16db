"""Shared test fixtures for the header formatting test suite."""

from __future__ import annotations

from email.header import decode_header, make_header

import pytest

from umbrella_headers.config import get_settings
from umbrella_headers.models import Group, Mailbox


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def plain_mailbox() -> Mailbox:
    return Mailbox(address="a@b.com")


@pytest.fixture
def named_mailbox() -> Mailbox:
    return Mailbox(address="john@example.com", name="John Smith")


@pytest.fixture
def friends_group() -> Group:
    return Group(
        name="Friends",
        members=[
            Mailbox(address="a@b.com"),
            Mailbox(address="c@d.com", name="C"),
        ],
    )


def decode_words(value: str) -> str:
    """Decode an RFC 2047 encoded header value back to text."""
    return str(make_header(decode_header(value)))
