"""Tests for umbrella_headers.grammar."""

from __future__ import annotations

import pytest

from umbrella_headers.errors import GrammarError
from umbrella_headers.grammar import parse
from umbrella_headers.models import Group, Mailbox


class TestParse:
    def test_bare_address(self):
        assert parse("a@b.com") == [Mailbox(address="a@b.com")]

    def test_name_addr(self):
        assert parse("John Smith <john@example.com>") == [
            Mailbox(address="john@example.com", name="John Smith"),
        ]

    def test_quoted_name_with_comma(self):
        assert parse('"Bob, Jr." <b@x.com>') == [Mailbox(address="b@x.com", name="Bob, Jr.")]

    def test_list_order_preserved(self):
        entries = parse("z@x.com, a@x.com, m@x.com")
        assert [e.address for e in entries] == ["z@x.com", "a@x.com", "m@x.com"]

    def test_group(self):
        entries = parse("Friends: a@b.com, C <c@d.com>;")
        assert entries == [
            Group(
                name="Friends",
                members=[Mailbox(address="a@b.com"), Mailbox(address="c@d.com", name="C")],
            )
        ]

    def test_empty_group(self):
        assert parse("Undisclosed recipients:;") == [Group(name="Undisclosed recipients")]

    def test_group_followed_by_mailbox(self):
        entries = parse("Team: a@b.com;, solo@x.com")
        assert isinstance(entries[0], Group)
        assert entries[1] == Mailbox(address="solo@x.com")

    def test_encoded_display_name_decoded(self):
        assert parse("=?UTF-8?Q?J=C3=BCrgen?= <j@x.com>") == [
            Mailbox(address="j@x.com", name="Jürgen"),
        ]

    def test_newlines_folded(self):
        assert parse("a@b.com,\r\n c@d.com") == [
            Mailbox(address="a@b.com"),
            Mailbox(address="c@d.com"),
        ]

    def test_blank_text(self):
        assert parse("") == []
        assert parse("   ") == []

    def test_missing_domain_rejected(self):
        with pytest.raises(GrammarError) as exc_info:
            parse("john.example.com")
        assert exc_info.value.text == "john.example.com"

    def test_free_text_rejected(self):
        with pytest.raises(GrammarError):
            parse("not an address")

    @pytest.mark.parametrize("text", ["a@", "<", "G: ;x", "G: H: a@b;;"])
    def test_broken_syntax_raises_grammar_error(self, text):
        with pytest.raises(GrammarError) as exc_info:
            parse(text)
        assert exc_info.value.text == text
        assert exc_info.value.defects
