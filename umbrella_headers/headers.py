"""Header key normalization and per-category header value encoding.

Each header key maps to a ``HeaderCategory``; a ``HeaderEncoderRegistry``
holds one encoder function per category.  ``default_registry`` ships with
encoders for every category, and callers can register replacements.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any

import structlog

from .addresses import convert_addresses, parse_addresses
from .encoding import mime_word_encode, mime_words_encode
from .errors import HeaderError

logger = structlog.get_logger()

_NEWLINES = re.compile(r"\r?\n|\r")
_KEY_CAPITALS = re.compile(r"^mime\b|^[a-z]|-[a-z]", re.ASCII)
_ANGLE_TOKEN = re.compile(r"<[^>]*>")
_WHITESPACE = re.compile(r"\s")

HeaderEncoder = Callable[[Any], str]


class HeaderCategory(str, Enum):
    """Encoding strategy a header value needs."""

    ADDRESS = "address"
    IDENTIFIER = "identifier"
    REFERENCES = "references"
    SUBJECT = "subject"
    UNSTRUCTURED = "unstructured"


_CATEGORY_BY_KEY: dict[str, HeaderCategory] = {
    "From": HeaderCategory.ADDRESS,
    "Sender": HeaderCategory.ADDRESS,
    "To": HeaderCategory.ADDRESS,
    "Cc": HeaderCategory.ADDRESS,
    "Bcc": HeaderCategory.ADDRESS,
    "Reply-To": HeaderCategory.ADDRESS,
    "Message-Id": HeaderCategory.IDENTIFIER,
    "In-Reply-To": HeaderCategory.IDENTIFIER,
    "Content-Id": HeaderCategory.IDENTIFIER,
    "References": HeaderCategory.REFERENCES,
    "Subject": HeaderCategory.SUBJECT,
}


def normalize_header_key(key: str = "") -> str:
    """Canonical Camel-Case header name, with a leading ``MIME`` kept uppercase.

    >>> normalize_header_key("content-type")
    'Content-Type'
    >>> normalize_header_key("mime-version")
    'MIME-Version'
    """
    key = _NEWLINES.sub(" ", key).strip().lower()
    return _KEY_CAPITALS.sub(lambda m: m.group(0).upper(), key)


def header_category(key: str) -> HeaderCategory:
    """Category of a (not necessarily normalized) header key."""
    return _CATEGORY_BY_KEY.get(normalize_header_key(key), HeaderCategory.UNSTRUCTURED)


# ------------------------------------------------------------------
# Encoders
# ------------------------------------------------------------------


def _to_text(value: Any) -> str:
    return _NEWLINES.sub(" ", "" if value is None else str(value))


def _wrap_identifier(value: str) -> str:
    if not value.startswith("<"):
        value = "<" + value
    if not value.endswith(">"):
        value = value + ">"
    return value


def encode_address_value(value: Any) -> str:
    return convert_addresses(parse_addresses(value)).text


def encode_identifier(value: Any) -> str:
    return _wrap_identifier(_to_text(value))


def encode_references(value: Any) -> str:
    """Normalize one or more References strings into ``<id1> <id2> ...``.

    Whitespace inside ``<...>`` is dropped so broken ids are repaired, then
    the text is split on whitespace and every token is bracketed.
    """
    if value is None:
        items: list[Any] = []
    elif isinstance(value, (list, tuple)):
        items = list(value)
    else:
        items = [value]

    tokens: list[str] = []
    for item in items:
        text = _to_text(item).strip()
        text = _ANGLE_TOKEN.sub(lambda m: _WHITESPACE.sub("", m.group(0)), text)
        tokens.extend(text.split())

    return " ".join(_wrap_identifier(token) for token in tokens).strip()


def encode_subject(value: Any) -> str:
    return mime_word_encode(_to_text(value), "B")


def encode_unstructured(value: Any) -> str:
    return mime_words_encode(_to_text(value), "B")


# ------------------------------------------------------------------
# Registry
# ------------------------------------------------------------------


class HeaderEncoderRegistry:
    """Registry of header value encoders, keyed by ``HeaderCategory``."""

    def __init__(self, encoders: Mapping[HeaderCategory, HeaderEncoder] | None = None) -> None:
        self._encoders: dict[HeaderCategory, HeaderEncoder] = dict(encoders or {})

    def register(self, category: HeaderCategory, encoder: HeaderEncoder) -> None:
        """Register (or replace) the encoder for *category*."""
        self._encoders[category] = encoder
        logger.debug("header_encoder_registered", category=category.value)

    def get(self, category: HeaderCategory) -> HeaderEncoder | None:
        """Look up an encoder. Returns None if nothing is registered."""
        return self._encoders.get(category)

    @property
    def supported_categories(self) -> list[HeaderCategory]:
        return list(self._encoders.keys())

    def encode(self, key: str, value: Any = "") -> str:
        """Encode *value* for header *key*.

        Categories without a registered encoder fall back to the
        unstructured encoder.
        """
        category = header_category(key)
        encoder = self._encoders.get(category) or self._encoders.get(HeaderCategory.UNSTRUCTURED)
        if encoder is None:
            raise HeaderError(f"No encoder registered for {category.value} header {key!r}")
        return encoder(value)


def build_default_registry() -> HeaderEncoderRegistry:
    # Runs at import, before setup_logging(): must not log.
    return HeaderEncoderRegistry(
        {
            HeaderCategory.ADDRESS: encode_address_value,
            HeaderCategory.IDENTIFIER: encode_identifier,
            HeaderCategory.REFERENCES: encode_references,
            HeaderCategory.SUBJECT: encode_subject,
            HeaderCategory.UNSTRUCTURED: encode_unstructured,
        }
    )


default_registry = build_default_registry()


def encode_header_value(key: str, value: Any = "") -> str:
    """Encode a header value for an outgoing RFC 5322 message."""
    return default_registry.encode(key, value)


def format_header(key: str, value: Any = "") -> str:
    """Full ``Key: value`` header line (unfolded)."""
    return f"{normalize_header_key(key)}: {encode_header_value(key, value)}"
