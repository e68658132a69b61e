"""
Request parameter validation.

Pagination parameters arrive as raw query strings and are parsed here
rather than by FastAPI so that each failure maps onto its own error
class (non-numeric, non-positive limit, negative offset).  The list-type
vocabulary also lives here: it is the only set of names allowed to
address a storage table.
"""

import re
import uuid
from typing import Optional, Tuple

from .errors import InvalidItemId, InvalidParameter, NegativeOffset, NonPositiveLimit, UnknownListType

# Recognised list types.  Each one is backed by its own table.
LIST_TYPES: Tuple[str, ...] = (
    "watchlist",
    "favourites",
    "viewed",
    "bids",
    "purchased",
)

WATCHLIST = "watchlist"

# Optional sign followed by ASCII digits, nothing else.
_INTEGER = re.compile(r"[+-]?[0-9]+")


def _parse_int(raw: str, name: str) -> int:
    if not _INTEGER.fullmatch(raw):
        raise InvalidParameter(f"invalid {name} parameter: {raw}")
    return int(raw)


def validate_limit(raw: Optional[str], default: int, maximum: int) -> int:
    """Parse a ``limit`` query parameter.

    Empty input yields ``default`` and values above ``maximum`` are
    clamped to it.  Non-numeric input raises :class:`InvalidParameter`;
    zero or negative input raises :class:`NonPositiveLimit`.
    """
    if raw is None or raw == "":
        return default
    limit = _parse_int(raw, "limit")
    if limit < 1:
        raise NonPositiveLimit(f"limit must be positive: {limit}")
    if limit > maximum:
        return maximum
    return limit


def validate_offset(raw: Optional[str]) -> int:
    """Parse an ``offset`` query parameter; empty input yields 0."""
    if raw is None or raw == "":
        return 0
    offset = _parse_int(raw, "offset")
    if offset < 0:
        raise NegativeOffset(f"offset must be non-negative: {offset}")
    return offset


def normalize_list_type(raw: str) -> str:
    return raw.strip().lower()


def is_valid_list_type(raw: str) -> bool:
    return normalize_list_type(raw) in LIST_TYPES


def resolve_list_type(raw: str) -> str:
    """Normalise ``raw`` and ensure it names a recognised list type."""
    list_type = normalize_list_type(raw or "")
    if list_type not in LIST_TYPES:
        raise UnknownListType(f"Unknown list type: {raw!r}")
    return list_type


def is_valid_uuid(value: str) -> bool:
    try:
        uuid.UUID(value)
    except (ValueError, TypeError, AttributeError):
        return False
    return True


def canonical_uuid(value: str) -> str:
    """Return ``value`` in lowercase hyphenated form or raise :class:`InvalidItemId`."""
    try:
        return str(uuid.UUID(value))
    except (ValueError, TypeError, AttributeError):
        raise InvalidItemId(f"Invalid UUID format: {value!r}") from None
