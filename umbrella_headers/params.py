"""Structured header values (``value; name=param``) and multipart boundaries."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from .config import get_settings
from .encoding import continuation_encode
from .models import HeaderDescriptor

_NEEDS_QUOTING = re.compile(r"[\s'\"\\;/=]|^-")
_QUOTED_SPECIALS = re.compile(r'(["\\])')


def generate_boundary(node_id: Any, base_boundary: str) -> str:
    """Multipart boundary for one MIME node.

    Unique per message only as long as the caller hands out distinct
    node ids.
    """
    return f"{get_settings().boundary_prefix}{node_id}-{base_boundary}"


def escape_header_argument(value: str) -> str:
    """Quote a parameter value (e.g. a boundary) when it contains specials."""
    if _NEEDS_QUOTING.search(value):
        return '"' + _QUOTED_SPECIALS.sub(r"\\\1", value) + '"'
    return value


def build_header_value(structured: HeaderDescriptor | Mapping[str, Any]) -> str:
    """Join a structured header as ``value; param1=value1; param2=value2``.

    ``filename`` goes through RFC 2231 continuation encoding instead of
    quoting; the segments are emitted bare since quoting them breaks
    filename parsing in some clients.
    """
    if not isinstance(structured, HeaderDescriptor):
        structured = HeaderDescriptor(
            value=structured.get("value") or "",
            params=structured.get("params") or {},
        )

    params = []
    for name, value in structured.params.items():
        if name == "filename":
            for segment in continuation_encode(name, value):
                params.append(f"{segment.key}={segment.value}")
        else:
            params.append(f"{name}={escape_header_argument(value)}")

    if not params:
        return structured.value
    return structured.value + "; " + "; ".join(params)
