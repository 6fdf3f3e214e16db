"""Address list handling — parse caller input into the address tree and render it back.

Rendering applies RFC 2047 Q encoding to display names and non-ASCII
local parts and IDNA to domains, so the produced header text is always
7-bit safe.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

import structlog

from . import grammar
from .config import get_settings
from .encoding import domain_to_ascii, mime_word_encode, mime_words_encode
from .models import AddressEntry, ConvertedAddresses, Group, Mailbox

logger = structlog.get_logger()

_PLAIN_NAME = re.compile(r"[\w ']*", re.ASCII)
_PRINTABLE_ASCII = re.compile(r"[\x20-\x7e]*")
_QUOTED_SPECIALS = re.compile(r'([\\"])')


def encode_address_name(name: str) -> str:
    """Make a display name safe to place in front of ``<address>``.

    Word characters, spaces and apostrophes pass through, other printable
    ASCII gets quoted, anything else becomes a Q encoded word.
    """
    if _PLAIN_NAME.fullmatch(name):
        return name
    if _PRINTABLE_ASCII.fullmatch(name):
        return '"' + _QUOTED_SPECIALS.sub(r"\\\1", name) + '"'
    return mime_word_encode(name, "Q", get_settings().max_q_word_length)


def encode_address(address: str) -> str:
    """Q-encode a non-ASCII local part and IDNA-encode the domain of an addr-spec."""
    local, at, domain = address.rpartition("@")
    if not at:
        return mime_words_encode(address, "Q")
    return f"{mime_words_encode(local, 'Q')}@{domain_to_ascii(domain)}"


def coerce_entry(item: Any) -> AddressEntry:
    """Turn a model instance or a plain dict into a ``Mailbox`` / ``Group``.

    Dicts may use ``{"address", "name"}`` for mailboxes and
    ``{"name", "group"}`` or ``{"name", "members"}`` for groups.
    """
    if isinstance(item, (Mailbox, Group)):
        return item
    if isinstance(item, Mapping):
        if "kind" in item:
            kind = item["kind"]
            return Mailbox.model_validate(item) if kind == "mailbox" else Group.model_validate(item)
        if "group" in item or "members" in item:
            members = item.get("members", item.get("group")) or []
            return Group(
                name=item.get("name") or "",
                members=[coerce_entry(member) for member in members if _is_entry(member)],
            )
        return Mailbox(address=item.get("address") or "", name=item.get("name") or "")
    raise TypeError(f"Cannot build an address entry from {type(item).__name__}")


def _as_list(entries: Any) -> list[Any]:
    if entries is None:
        return []
    if isinstance(entries, (Mailbox, Group, Mapping, str, bytes)) or not isinstance(entries, Iterable):
        return [entries]
    return list(entries)


def _is_entry(item: Any) -> bool:
    return isinstance(item, (Mailbox, Group, Mapping))


def convert_addresses(
    entries: AddressEntry | Iterable[AddressEntry] | None = None,
    seen: Sequence[str] | None = None,
) -> ConvertedAddresses:
    """Render address entries as header text.

    Returns the ``", "``-joined header value together with the list of
    encoded addr-specs in first-seen order.  *seen* pre-populates that
    list (it is copied, not modified), which lets a caller accumulate
    unique envelope recipients across several headers.  Items that are
    neither entries nor dicts (e.g. raw address text) are skipped; run
    text through ``parse_addresses`` first.
    """
    unique = list(seen or [])
    items = _as_list(entries)
    skipped = [item for item in items if not _is_entry(item)]
    if skipped:
        logger.debug("address_items_skipped", count=len(skipped))
    text = _render([coerce_entry(item) for item in items if _is_entry(item)], unique)
    return ConvertedAddresses(text=text, addresses=unique)


def _render(entries: list[AddressEntry], unique: list[str]) -> str:
    values = []
    for entry in entries:
        if isinstance(entry, Mailbox):
            if not entry.address:
                continue
            address = encode_address(entry.address)
            if entry.name:
                values.append(f"{encode_address_name(entry.name)} <{address}>")
            else:
                values.append(address)
            if address not in unique:
                unique.append(address)
        else:
            members = _render(entry.members, unique).strip() if entry.members else ""
            values.append(f"{encode_address_name(entry.name)}:{members};")
    return ", ".join(values)


def _flatten(addresses: Any) -> Iterable[Any]:
    if isinstance(addresses, (list, tuple)):
        for item in addresses:
            yield from _flatten(item)
    elif addresses is not None:
        yield addresses


def parse_addresses(addresses: Any = None) -> list[AddressEntry]:
    """Parse any mix of address text, entries and nested lists into a flat entry list.

    Structured items are rendered first so the grammar only ever sees
    ASCII-safe text.  ``GrammarError`` from the grammar propagates.
    """
    entries: list[AddressEntry] = []
    for item in _flatten(addresses):
        if isinstance(item, (Mailbox, Group, Mapping)):
            text = convert_addresses(item).text
        else:
            text = str(item)
        entries.extend(grammar.parse(text))

    logger.debug("addresses_parsed", count=len(entries))
    return entries
