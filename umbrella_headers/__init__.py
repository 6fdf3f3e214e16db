"""Umbrella Headers — RFC 5322/2047/2231 header text formatting for outgoing mail.

Public API re-exported here for convenience::

    from umbrella_headers import encode_header_value, build_header_value
"""

from .addresses import coerce_entry, convert_addresses, encode_address_name, parse_addresses
from .config import HeaderSettings, get_settings
from .encoding import (
    continuation_encode,
    domain_to_ascii,
    is_plain_text,
    mime_word_encode,
    mime_words_encode,
)
from .errors import GrammarError, HeaderError
from .headers import (
    HeaderCategory,
    HeaderEncoderRegistry,
    default_registry,
    encode_header_value,
    format_header,
    header_category,
    normalize_header_key,
)
from .logging import setup_logging
from .models import (
    AddressEntry,
    ContinuationParam,
    ConvertedAddresses,
    Group,
    HeaderDescriptor,
    Mailbox,
)
from .params import build_header_value, escape_header_argument, generate_boundary

__all__ = [
    "AddressEntry",
    "ContinuationParam",
    "ConvertedAddresses",
    "GrammarError",
    "Group",
    "HeaderCategory",
    "HeaderDescriptor",
    "HeaderEncoderRegistry",
    "HeaderError",
    "HeaderSettings",
    "Mailbox",
    "build_header_value",
    "coerce_entry",
    "continuation_encode",
    "convert_addresses",
    "default_registry",
    "domain_to_ascii",
    "encode_address_name",
    "encode_header_value",
    "escape_header_argument",
    "format_header",
    "generate_boundary",
    "get_settings",
    "header_category",
    "is_plain_text",
    "mime_word_encode",
    "mime_words_encode",
    "normalize_header_key",
    "parse_addresses",
    "setup_logging",
]
