"""Low-level header codecs.

* RFC 2047 encoded words (``=?UTF-8?Q?...?=`` / ``=?UTF-8?B?...?=``)
* RFC 2231 parameter continuation (``filename*0*=utf-8''...``)
* IDNA conversion of domain names

Everything returned here is 7-bit clean.
"""

from __future__ import annotations

import base64
import re
from email import quoprimime
from urllib.parse import quote

import structlog

from .config import get_settings
from .errors import HeaderError
from .models import ContinuationParam

logger = structlog.get_logger()

_CONTROL_OR_8BIT = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\u0080-\U0010ffff]")

_NON_ASCII = "\u0080-\U0010ffff"
# Words containing non-ASCII characters, merged with the next such word
# when only whitespace separates them.  Pure ASCII words are left alone.
_NON_ASCII_RUN = re.compile(
    rf"(?:[^\s{_NON_ASCII}]*[{_NON_ASCII}]+[^\s{_NON_ASCII}]*"
    rf"(?:\s+[^\s{_NON_ASCII}]*[{_NON_ASCII}]+[^\s{_NON_ASCII}]*\s*)?)+"
    r"(?=\s|\Z)"
)

_PLAIN_PARAM = re.compile(r"^[\w.\- ]*$", re.ASCII)
_RFC2231_PREFIX = "utf-8''"
_LABEL_SEPARATORS = re.compile("[.。．｡]")


def is_plain_text(value: object) -> bool:
    """True if *value* is a string of printable 7-bit characters (tabs and line breaks allowed)."""
    return isinstance(value, str) and not _CONTROL_OR_8BIT.search(value)


# ------------------------------------------------------------------
# RFC 2047 encoded words
# ------------------------------------------------------------------


def _q_encode(text: str) -> str:
    out = []
    for octet in text.encode("utf-8"):
        if octet == 0x20:
            out.append("_")
        elif quoprimime.header_check(octet):
            out.append(quoprimime.quote(chr(octet)))
        else:
            out.append(chr(octet))
    return "".join(out)


def _b_encode(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def _split_for_word(text: str, encoding: str, max_length: int) -> list[str]:
    """Split *text* on character boundaries so every chunk fits one encoded word.

    Q chunks are measured in encoded characters, B chunks in UTF-8 source bytes.
    """
    measure = (lambda s: len(_q_encode(s))) if encoding == "Q" else (lambda s: len(s.encode("utf-8")))

    chunks: list[str] = []
    current = ""
    size = 0
    for char in text:
        char_size = measure(char)
        if current and size + char_size > max_length:
            chunks.append(current)
            current, size = "", 0
        current += char
        size += char_size
    if current:
        chunks.append(current)
    return chunks


def mime_word_encode(text: str, encoding: str = "Q", max_length: int | None = None) -> str:
    """Encode *text* as RFC 2047 encoded word(s) in UTF-8.

    Without *max_length* the whole text becomes a single word.  With it,
    the text is split into several space-separated words, never breaking
    a character across words.  Empty text encodes to an empty string.
    """
    encoding = encoding.upper()
    if encoding not in ("Q", "B"):
        raise HeaderError(f"Unsupported encoded-word encoding {encoding!r}")
    if not text:
        return ""

    chunks = [text] if max_length is None else _split_for_word(text, encoding, max_length)
    encode = _q_encode if encoding == "Q" else _b_encode
    return " ".join(f"=?UTF-8?{encoding}?{encode(chunk)}?=" for chunk in chunks)


def mime_words_encode(text: str, encoding: str = "Q") -> str:
    """Encode only the parts of *text* that contain non-ASCII characters."""
    settings = get_settings()
    limit = settings.max_q_word_length if encoding.upper() == "Q" else settings.max_b_word_bytes
    return _NON_ASCII_RUN.sub(lambda m: mime_word_encode(m.group(0), encoding, limit), text)


# ------------------------------------------------------------------
# RFC 2231 continuation
# ------------------------------------------------------------------


def continuation_encode(
    key: str,
    value: str,
    max_length: int | None = None,
) -> list[ContinuationParam]:
    """Split a parameter value into RFC 2231 segments.

    Short values made of word characters, dots, dashes and spaces are
    returned as a single ``key=value``; longer ones of that kind become
    plain ``key*N`` slices.  Anything else is percent-encoded as UTF-8 into
    ``key*N*`` segments, the first one carrying the ``utf-8''`` charset
    prefix.  Encoded segments are cut before reaching *max_length*.  Values are
    never quoted.
    """
    if max_length is None:
        max_length = get_settings().continuation_max_length

    if _PLAIN_PARAM.match(value):
        if len(value) <= max_length:
            return [ContinuationParam(key=key, value=value)]
        slices = [value[i : i + max_length] for i in range(0, len(value), max_length)]
        return [
            ContinuationParam(key=f"{key}*{index}", value=part)
            for index, part in enumerate(slices)
        ]

    segments: list[str] = []
    current = _RFC2231_PREFIX
    for char in value:
        escaped = quote(char, safe="")
        if current and current != _RFC2231_PREFIX and len(current) + len(escaped) >= max_length:
            segments.append(current)
            current = ""
        current += escaped
    segments.append(current)

    return [
        ContinuationParam(key=f"{key}*{index}*", value=segment)
        for index, segment in enumerate(segments)
    ]


# ------------------------------------------------------------------
# IDNA
# ------------------------------------------------------------------


def domain_to_ascii(domain: str) -> str:
    """Convert an internationalized domain to its ``xn--`` form.

    ASCII labels are kept verbatim (case included); only labels with
    non-ASCII characters go through the IDNA codec.  Labels IDNA rejects
    (too long, prohibited characters) fall back to raw Punycode, so the
    result is always ASCII.
    """
    labels = []
    for label in _LABEL_SEPARATORS.split(domain):
        if label.isascii():
            labels.append(label)
            continue
        try:
            labels.append(label.encode("idna").decode("ascii"))
        except UnicodeError as exc:
            logger.warning("idna_conversion_failed", domain=domain, label=label, error=str(exc))
            labels.append("xn--" + label.encode("punycode").decode("ascii"))
    return ".".join(labels)
