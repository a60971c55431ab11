"""URI minting helpers.

This module centralizes how instance URIs are built from the base URI
and natural ids so every entity kind escapes segments the same way.
"""

from __future__ import annotations

import re
from urllib.parse import quote

_WHITESPACE_RUN = re.compile(r"\s+")
_IRI_FORBIDDEN = re.compile(r'[\x00-\x20<>"{}|^`\\]')


def mint_uri(base_uri: str, *segments: str) -> str:
    """Join percent-escaped path segments onto a base URI.

    Args:
        base_uri: Base URI without trailing slash.
        segments: Raw path segments; each is escaped independently.

    Returns:
        Deterministic URI ``base/seg1/seg2/...``.
    """
    escaped = [quote(segment, safe="") for segment in segments]
    return "/".join([base_uri, *escaped])


def make_name_id(name: str) -> str:
    """Build a name-derived id.

    Lower-cases the name and collapses whitespace runs to ``_``, so
    names differing only in case or spacing share one id.
    """
    return _WHITESPACE_RUN.sub("_", name.lower())


def escape_iri(value: str) -> str:
    """Percent-encode characters not allowed inside an IRI reference."""
    return _IRI_FORBIDDEN.sub(_percent_encode, value)


def _percent_encode(match: re.Match[str]) -> str:
    return "".join(f"%{byte:02X}" for byte in match.group(0).encode("utf-8"))
