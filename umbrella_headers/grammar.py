"""RFC 5322 address-list grammar adapter.

Parsing itself is done by ``email.headerregistry``; this module maps the
result onto the package's ``Mailbox`` / ``Group`` tree and turns text
the grammar could not make sense of into ``GrammarError``.
"""

from __future__ import annotations

import re
from email.errors import HeaderParseError
from email.headerregistry import HeaderRegistry

import structlog

from .errors import GrammarError
from .models import AddressEntry, Group, Mailbox

logger = structlog.get_logger()

_NEWLINES = re.compile(r"\r?\n|\r")

_registry = HeaderRegistry()

# The stdlib parser gives up on some broken input ("a@", "<", nested
# groups) with these instead of recording a defect.
_PARSER_FAILURES = (HeaderParseError, IndexError, AttributeError, ValueError)


def parse(text: str) -> list[AddressEntry]:
    """Parse ``Name <addr>, Group: a@b, c@d;`` style text into address entries.

    Encoded words in display names are decoded.  Raises ``GrammarError`` if
    the text is not an address list or any mailbox lacks a local part or a
    domain.
    """
    text = _NEWLINES.sub(" ", text)
    if not text.strip():
        return []

    try:
        header = _registry("To", text)
        groups = [(group.display_name, group.addresses) for group in header.groups]
    except _PARSER_FAILURES as exc:
        defects = [f"{type(exc).__name__}: {exc}"]
        _reject(text, defects)
        raise GrammarError(text, defects) from exc

    entries: list[AddressEntry] = []
    for display_name, addresses in groups:
        mailboxes = [_to_mailbox(text, header, address) for address in addresses]
        if display_name is None:
            entries.extend(mailboxes)
        else:
            entries.append(Group(name=display_name, members=mailboxes))
    return entries


def _reject(text: str, defects: list[str]) -> None:
    logger.warning("address_grammar_rejected", text=text, defects=defects)


def _to_mailbox(text, header, address) -> Mailbox:
    if not address.username or not address.domain:
        defects = [str(defect) for defect in header.defects]
        _reject(text, defects)
        raise GrammarError(text, defects)
    return Mailbox(address=address.addr_spec, name=address.display_name)
