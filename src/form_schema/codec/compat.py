"""
Compatibility shims applied at the decode boundary.

Stored records carry several historical representations: the discriminator
may sit under ``type`` or the legacy ``__type`` key, checkbox defaults may
be a list or a comma-joined string under ``defaultValues`` or
``defaultValue``, and numeric bounds may be numbers or strings. Everything
is normalized here, before dispatch, so field models and the rest of the
package only ever see the canonical representation. Each repair is
reported as a diagnostic.
"""

from collections.abc import Mapping
from typing import Any

from form_schema.diagnostics import DiagnosticReport, report_diagnostic
from form_schema.models.field_types import FieldType
from form_schema.models.fields import FIELD_CLASSES
from form_schema.parsing import number_text, split_list_value

TYPE_KEY = "type"
LEGACY_TYPE_KEY = "__type"


def resolve_field_type(
    record: Mapping[str, Any],
    field_id: str | None = None,
    diagnostics: DiagnosticReport | None = None,
) -> FieldType | None:
    """
    Read a record's discriminator, preferring ``type`` over ``__type``.

    Returns:
        The concrete field kind, or None when the tag is missing or unknown.
    """
    primary = record.get(TYPE_KEY)
    legacy = record.get(LEGACY_TYPE_KEY)
    tag = primary or legacy

    if primary and legacy and primary != legacy:
        report_diagnostic(
            diagnostics,
            "conflicting_discriminator",
            f"Record has type={primary!r} and __type={legacy!r}; using {primary!r}",
            field_id=field_id,
            attribute=TYPE_KEY,
        )

    if not tag:
        report_diagnostic(
            diagnostics,
            "missing_discriminator",
            "Record has no field type; decoding as a bare form field",
            field_id=field_id,
            attribute=TYPE_KEY,
        )
        return None

    kind = FieldType.from_tag(tag)
    if kind is None or kind not in FIELD_CLASSES:
        report_diagnostic(
            diagnostics,
            "unknown_field_type",
            f"Unknown field type {tag!r}; decoding as a bare form field",
            field_id=field_id,
            attribute=TYPE_KEY,
        )
        return None
    return kind


def checkbox_defaults(
    record: Mapping[str, Any],
    field_id: str | None = None,
    diagnostics: DiagnosticReport | None = None,
) -> list[str]:
    """
    Canonical list of checkbox defaults.

    Reads ``defaultValues`` or, for older records, ``defaultValue``. Lists
    are kept entry for entry; strings are split on the list separator with
    segments trimmed and empty segments dropped.
    """
    if record.get("defaultValues") is not None:
        key = "defaultValues"
    else:
        key = "defaultValue"
    value = record.get(key)

    if value is None:
        return []
    if isinstance(value, list):
        return [str(item) for item in value if item is not None]
    if isinstance(value, str):
        if value:
            report_diagnostic(
                diagnostics,
                "legacy_list_encoding",
                f"Checkbox defaults stored as a joined string under '{key}'",
                field_id=field_id,
                attribute=key,
            )
        return split_list_value(value)

    report_diagnostic(
        diagnostics,
        "invalid_attribute",
        f"Checkbox defaults of type {type(value).__name__} ignored",
        field_id=field_id,
        attribute=key,
    )
    return []


def text_attribute(
    record: Mapping[str, Any],
    key: str,
    field_id: str | None = None,
    diagnostics: DiagnosticReport | None = None,
) -> str:
    """Scalar text attribute; missing or empty values become ""."""
    value = record.get(key)
    if value is None or value == "":
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return number_text(value)

    report_diagnostic(
        diagnostics,
        "invalid_attribute",
        f"Attribute '{key}' of type {type(value).__name__} replaced with an empty string",
        field_id=field_id,
        attribute=key,
    )
    return ""


def optional_text_attribute(
    record: Mapping[str, Any],
    key: str,
    field_id: str | None = None,
    diagnostics: DiagnosticReport | None = None,
) -> str | None:
    """Optional text attribute (e.g. date bounds); missing stays None."""
    value = record.get(key)
    if value is None:
        return None
    return text_attribute(record, key, field_id, diagnostics)


def string_list_attribute(
    record: Mapping[str, Any],
    key: str,
    field_id: str | None = None,
    diagnostics: DiagnosticReport | None = None,
) -> list[str]:
    """List attribute (options); missing becomes []."""
    value = record.get(key)
    if value is None:
        return []
    if isinstance(value, list):
        return [item if isinstance(item, str) else str(item) for item in value if item is not None]

    report_diagnostic(
        diagnostics,
        "invalid_attribute",
        f"Attribute '{key}' is not a list; replaced with an empty list",
        field_id=field_id,
        attribute=key,
    )
    return []


def flag_attribute(record: Mapping[str, Any], key: str) -> bool:
    """Boolean attribute; missing becomes False, "true"/"false" strings are honored."""
    value = record.get(key)
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return bool(value)


def number_attribute(
    record: Mapping[str, Any],
    key: str,
    field_id: str | None = None,
    diagnostics: DiagnosticReport | None = None,
) -> float | None:
    """Optional numeric bound; blank is None, unparseable values are dropped."""
    value = record.get(key)
    if value is None or value == "":
        return None
    number = _strict_number(value)
    if number is not None:
        return number

    report_diagnostic(
        diagnostics,
        "unparseable_number",
        f"Attribute '{key}' value {value!r} is not a number; dropped",
        field_id=field_id,
        attribute=key,
    )
    return None


def integer_attribute(
    record: Mapping[str, Any],
    key: str,
    field_id: str | None = None,
    diagnostics: DiagnosticReport | None = None,
) -> int | None:
    """Optional integer limit (minLength, maxSelections...); see number_attribute."""
    value = record.get(key)
    if value is None or value == "":
        return None
    number = _strict_number(value)
    if number is not None and number.is_integer():
        return int(number)

    report_diagnostic(
        diagnostics,
        "unparseable_number",
        f"Attribute '{key}' value {value!r} is not an integer; dropped",
        field_id=field_id,
        attribute=key,
    )
    return None


def _strict_number(value: Any) -> float | None:
    # Whole-value parse: stored bounds like "12px" are rejected, not truncated
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None
