"""Exceptions raised by the header formatting package."""

from __future__ import annotations


class HeaderError(Exception):
    """Base class for header formatting errors."""


class GrammarError(HeaderError):
    """Address text could not be parsed as an RFC 5322 address list."""

    def __init__(self, text: str, defects: list[str] | None = None) -> None:
        self.text = text
        self.defects = defects or []
        detail = "; ".join(self.defects) if self.defects else "malformed address list"
        super().__init__(f"Invalid address list {text!r}: {detail}")
