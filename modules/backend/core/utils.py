"""
Core Utilities.

Shared utility functions used across the backend.
"""

import re
from datetime import datetime, timezone
from typing import Any

_INTEGER_PATTERN = re.compile(r"[+-]?\d+")


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-naive datetime.

    All datetime values in the application are timezone-naive
    and assumed to be UTC.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_int(value: Any) -> int | None:
    """
    Parse an untyped request value (form field, path segment) as an integer.

    Only plain decimal strings and real ints are accepted; booleans,
    floats, blank strings and anything with trailing garbage yield None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if not isinstance(value, str):
        return None
    candidate = value.strip()
    if not _INTEGER_PATTERN.fullmatch(candidate):
        return None
    return int(candidate)
