"""
Display formatting of answer values.

Used wherever stored answers are shown as text (response tables, exports).
Every formatter accepts whatever shape the answer was stored in and returns
a string; None always formats to "".

Usage:
    >>> format_field_value(["A", "B"], FieldType.CHECKBOX_FIELD)
    'A, B'
    >>> format_field_value(1609459200000, FieldType.DATE_FIELD)
    '2021-01-01'
    >>> format_field_value("  User@Example.COM ", FieldType.EMAIL_FIELD)
    'user@example.com'
"""

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from form_schema.models.field_types import FieldType
from form_schema.parsing import number_text, parse_date, parse_number, split_list_value

DEFAULT_SEPARATOR = ", "
DEFAULT_DATE_FORMAT = "%Y-%m-%d"
INVALID_DATE = "Invalid date"


def format_list_value(value: Any, separator: str = DEFAULT_SEPARATOR) -> str:
    """Join list answers (checkbox, multi-select); scalars are stringified."""
    if value is None:
        return ""
    if isinstance(value, list):
        return separator.join(str(item) for item in value if item)
    return str(value)


def format_number_value(value: Any) -> str:
    if value is None or value == "":
        return ""
    number = parse_number(value)
    if number is None:
        return str(value)
    return number_text(number)


def format_email_value(value: Any) -> str:
    if value is None or value == "":
        return ""
    return str(value).strip().lower()


def format_text_value(value: Any, max_length: int | None = None) -> str:
    """Trim text; when longer than ``max_length``, cut it and end with "..."."""
    if value is None or value == "":
        return ""
    text = str(value).strip()
    if max_length and len(text) > max_length:
        return text[: max(max_length - 3, 0)] + "..."
    return text


def format_date_value(value: Any, date_format: str = DEFAULT_DATE_FORMAT) -> str:
    """
    Format a date answer.

    Accepts epoch milliseconds (number or digit string), ISO strings and
    datetime objects. Returns "Invalid date" when nothing parses.
    """
    if value is None or value == "":
        return ""

    parsed: datetime | None = None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        parsed = _from_epoch_millis(value)
    elif isinstance(value, str):
        text = value.strip()
        if text.lstrip("-").isdigit():
            parsed = _from_epoch_millis(int(text))
        else:
            parsed = parse_date(text)

    if parsed is None:
        return INVALID_DATE
    return parsed.strftime(date_format)


def _from_epoch_millis(millis: float) -> datetime | None:
    try:
        return datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def format_field_value(
    value: Any,
    field_type: FieldType | str,
    separator: str = DEFAULT_SEPARATOR,
    max_length: int | None = None,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> str:
    """
    Format one answer for display according to its field kind.

    Args:
        value: Stored answer.
        field_type: Kind tag of the answered field.
        separator: Joiner for list answers.
        max_length: Truncation length for text answers.
        date_format: strftime format for date answers.

    Returns:
        Display string.
    """
    if value is None:
        return ""

    kind = FieldType.from_tag(field_type)
    if kind in (FieldType.CHECKBOX_FIELD, FieldType.SELECT_FIELD):
        return format_list_value(value, separator)
    if kind == FieldType.DATE_FIELD:
        return format_date_value(value, date_format)
    if kind == FieldType.NUMBER_FIELD:
        return format_number_value(value)
    if kind == FieldType.EMAIL_FIELD:
        return format_email_value(value)
    if kind in (FieldType.TEXT_INPUT_FIELD, FieldType.TEXT_AREA_FIELD):
        return format_text_value(value, max_length)
    return str(value)


def format_response_data(
    response_data: Mapping[str, Any],
    field_types: Mapping[str, FieldType | str],
    separator: str = DEFAULT_SEPARATOR,
    max_length: int | None = None,
) -> dict[str, str]:
    """
    Format every answer of a response.

    Answers whose field id has no known kind are stringified, with falsy
    values shown as "".
    """
    formatted: dict[str, str] = {}
    for field_id, value in response_data.items():
        field_type = field_types.get(field_id)
        if field_type:
            formatted[field_id] = format_field_value(value, field_type, separator, max_length)
        else:
            formatted[field_id] = str(value) if value else ""
    return formatted


def parse_formatted_value(formatted: str | None, field_type: FieldType | str) -> Any:
    """
    Parse a display string back to an answer value (for editing).

    Lists are split on commas, numbers parsed (None when unparseable), dates
    parsed to datetime; anything else is returned unchanged. "" gives None.
    """
    if formatted is None or formatted == "":
        return None

    kind = FieldType.from_tag(field_type)
    if kind in (FieldType.CHECKBOX_FIELD, FieldType.SELECT_FIELD):
        return split_list_value(formatted, ",")
    if kind == FieldType.DATE_FIELD:
        return parse_date(formatted)
    if kind == FieldType.NUMBER_FIELD:
        return parse_number(formatted)
    return formatted
