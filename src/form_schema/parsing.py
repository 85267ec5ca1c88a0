"""
Lenient value parsing shared by validation, decoding and the value engine.

Stored form records come from UI inputs, so numbers and dates frequently
arrive as strings. The helpers here never raise: an unparseable value yields
``None`` and callers treat that as "rule does not apply".
"""

import math
import re
from datetime import datetime, timezone
from typing import Any

from form_schema.config import get_config

# Leading numeric prefix, as accepted by JavaScript's parseFloat ("12px" -> 12)
_NUMBER_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_INFINITY_PREFIX = re.compile(r"^\s*([+-]?)Infinity")

# Numeric text as typed into a bound input: "", "-", "1.", ".5", "-3.25"
NUMERIC_TEXT = re.compile(r"^-?\d*\.?\d*$")


def parse_number(value: Any) -> float | None:
    """
    Parse a number the way form inputs are parsed.

    Strings are parsed by their leading numeric prefix, so ``"42abc"`` is 42.0
    and ``"abc"`` is None. Booleans, None, NaN and other types give None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
        return None if math.isnan(number) else number
    if not isinstance(value, str):
        return None

    match = _NUMBER_PREFIX.match(value)
    if match:
        return float(match.group(1))
    match = _INFINITY_PREFIX.match(value)
    if match:
        return -math.inf if match.group(1) == "-" else math.inf
    return None


def parse_date(value: Any) -> datetime | None:
    """
    Parse an ISO 8601 date or date-time string.

    Timezone-aware values are converted to naive UTC so that date-only and
    date-time values compare with each other. Returns None when unparseable.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        # "Z" suffix (toISOString output) is only accepted by fromisoformat from 3.11
        if text[-1] in "Zz":
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def split_list_value(value: Any, separator: str | None = None) -> list[str]:
    """
    Normalize a multi-valued default into a list of trimmed, non-empty strings.

    Accepts a list, or a legacy string joined with ``separator`` (defaults to
    config.list_separator). Anything else gives an empty list.

    Example:
        >>> split_list_value("x, y,,z ")
        ['x', 'y', 'z']
    """
    if isinstance(value, (list, tuple)):
        items = [str(item).strip() for item in value if item is not None]
        return [item for item in items if item]
    if isinstance(value, str):
        separator = separator or get_config().list_separator
        return [segment.strip() for segment in value.split(separator) if segment.strip()]
    return []


def is_blank(value: Any) -> bool:
    """True for None and for strings that are empty after trimming."""
    return value is None or (isinstance(value, str) and not value.strip())


def number_text(value: int | float) -> str:
    """Render a number without a trailing ``.0`` for whole values."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
