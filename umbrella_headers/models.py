"""Data models for header formatting — the address tree and structured header values."""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class Mailbox(BaseModel):
    """A single recipient: ``address`` with an optional display name."""

    kind: Literal["mailbox"] = "mailbox"
    address: str = Field(description="Addr-spec, e.g. user@example.com")
    name: str = Field(default="", description="Display name (empty when absent)")


class Group(BaseModel):
    """An RFC 5322 named group.  ``members`` may be empty."""

    kind: Literal["group"] = "group"
    name: str = Field(description="Group display name")
    members: list[AddressEntry] = Field(
        default_factory=list,
        description="Mailboxes (or nested entries) belonging to the group, in order",
    )


AddressEntry = Annotated[Union[Mailbox, Group], Field(discriminator="kind")]

Group.model_rebuild()


class HeaderDescriptor(BaseModel):
    """A header value with semicolon-separated parameters (Content-Type, Content-Disposition)."""

    value: str = Field(description="Main header value, e.g. attachment or text/plain")
    params: dict[str, str] = Field(
        default_factory=dict,
        description="Parameter name → value, rendered in iteration order",
    )


class ContinuationParam(BaseModel):
    """One RFC 2231 parameter segment, e.g. ``filename*0*`` = ``utf-8''r%C3%A9``."""

    key: str
    value: str


class ConvertedAddresses(BaseModel):
    """Result of rendering an address tree.

    ``text`` is the header value; ``addresses`` is the deduplicated list of
    encoded addr-specs in first-seen order (suitable for envelope recipients).
    """

    text: str = ""
    addresses: list[str] = Field(default_factory=list)
