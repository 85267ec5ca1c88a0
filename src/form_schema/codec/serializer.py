"""
Serialization codec between field instances and flat storage/wire records.

Encoding copies every attribute of the instance under its wire name and adds
a redundant ``__type`` discriminator, so stored records stay self-describing.
Decoding runs the compatibility shims, then dispatches on the resolved kind.
It never raises for unknown kinds: such records decode to a bare FormField
that keeps only the id.

Round trip:
    >>> field = NumberField(id="age", label="Age", min=0, max=120)
    >>> deserialize_form_field(serialize_form_field(field)) == field
    True
"""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from form_schema.codec.compat import (
    LEGACY_TYPE_KEY,
    checkbox_defaults,
    flag_attribute,
    integer_attribute,
    number_attribute,
    optional_text_attribute,
    resolve_field_type,
    string_list_attribute,
    text_attribute,
)
from form_schema.diagnostics import DiagnosticReport, report_diagnostic
from form_schema.models.field_types import LENGTH_BOUNDED_FIELD_TYPES, FieldType
from form_schema.models.fields import (
    FIELD_CLASSES,
    CheckboxFieldValidation,
    FillableFormFieldValidation,
    FormField,
    RichTextFormField,
    TextFieldValidation,
)
from form_schema.models.form import FormLayout, FormPage, FormSchema

logger = logging.getLogger(__name__)


# -- Encode ------------------------------------------------------------------


def serialize_form_field(field: FormField) -> dict[str, Any]:
    """
    Convert a field instance to a plain record for storage.

    Returns:
        Dict with every attribute under its wire name, plus ``__type``.
    """
    record = field.model_dump(by_alias=True, mode="json")
    record[LEGACY_TYPE_KEY] = field.type.value
    return record


def serialize_form_page(page: FormPage) -> dict[str, Any]:
    return {
        "id": page.id,
        "title": page.title,
        "order": page.order,
        "fields": [serialize_form_field(field) for field in page.fields],
    }


def serialize_form_schema(schema: FormSchema) -> dict[str, Any]:
    """Convert a whole form to its storage record."""
    return {
        "pages": [serialize_form_page(page) for page in schema.pages],
        "layout": schema.layout.model_dump(by_alias=True, exclude_none=True),
        "isShuffleEnabled": schema.is_shuffle_enabled,
    }


# -- Decode ------------------------------------------------------------------


def build_validation(
    record: Mapping[str, Any],
    field_type: FieldType,
    field_id: str | None = None,
    diagnostics: DiagnosticReport | None = None,
) -> FillableFormFieldValidation:
    """
    Rebuild a field's validation object for its kind.

    Text kinds get TextFieldValidation, checkbox gets CheckboxFieldValidation,
    every other kind gets the base required-only validation.
    """
    raw = record.get("validation")
    if raw is None:
        raw = {}
    elif not isinstance(raw, Mapping):
        report_diagnostic(
            diagnostics,
            "invalid_attribute",
            "Validation object is not a mapping; using defaults",
            field_id=field_id,
            attribute="validation",
        )
        raw = {}

    required = flag_attribute(raw, "required")

    if field_type in LENGTH_BOUNDED_FIELD_TYPES:
        return TextFieldValidation(
            required=required,
            min_length=integer_attribute(raw, "minLength", field_id, diagnostics),
            max_length=integer_attribute(raw, "maxLength", field_id, diagnostics),
        )
    if field_type == FieldType.CHECKBOX_FIELD:
        return CheckboxFieldValidation(
            required=required,
            min_selections=integer_attribute(raw, "minSelections", field_id, diagnostics),
            max_selections=integer_attribute(raw, "maxSelections", field_id, diagnostics),
        )
    return FillableFormFieldValidation(required=required)


def _wire_names(field_class: type[FormField]) -> set[str]:
    return {info.alias or name for name, info in field_class.model_fields.items()}


def _report_unknown_attributes(
    record: Mapping[str, Any],
    field_class: type[FormField],
    field_id: str,
    diagnostics: DiagnosticReport | None,
    accepted: set[str],
) -> None:
    known = _wire_names(field_class) | accepted | {LEGACY_TYPE_KEY}
    for key in record:
        if key not in known:
            report_diagnostic(
                diagnostics,
                "unknown_attribute",
                f"Attribute '{key}' is not part of {field_class.kind().value}; dropped",
                field_id=field_id,
                attribute=str(key),
            )


def deserialize_form_field(
    record: Mapping[str, Any],
    diagnostics: DiagnosticReport | None = None,
) -> FormField:
    """
    Reconstruct a field instance from a stored record.

    Args:
        record: Plain record, with ``type`` and/or ``__type``.
        diagnostics: Optional report collecting every repair made.

    Returns:
        The concrete field instance, or a bare FormField (id only) when the
        discriminator is missing or unknown.
    """
    if not isinstance(record, Mapping):
        report_diagnostic(diagnostics, "invalid_record", f"Field record of type {type(record).__name__} ignored")
        return FormField(id="")

    raw_id = record.get("id")
    field_id = "" if raw_id is None else str(raw_id)
    if raw_id is None:
        report_diagnostic(diagnostics, "missing_id", "Field record has no id", attribute="id")

    field_type = resolve_field_type(record, field_id, diagnostics)
    if field_type is None:
        return FormField(id=field_id)

    field_class = FIELD_CLASSES[field_type]

    if field_type == FieldType.RICH_TEXT_FIELD:
        _report_unknown_attributes(record, field_class, field_id, diagnostics, set())
        return RichTextFormField(id=field_id, content=text_attribute(record, "content", field_id, diagnostics))

    attributes: dict[str, Any] = {
        "id": field_id,
        "label": text_attribute(record, "label", field_id, diagnostics),
        "prefix": text_attribute(record, "prefix", field_id, diagnostics),
        "hint": text_attribute(record, "hint", field_id, diagnostics),
        "placeholder": text_attribute(record, "placeholder", field_id, diagnostics),
        "validation": build_validation(record, field_type, field_id, diagnostics),
    }
    accepted: set[str] = set()

    if field_type == FieldType.CHECKBOX_FIELD:
        attributes["default_value"] = checkbox_defaults(record, field_id, diagnostics)
        attributes["options"] = string_list_attribute(record, "options", field_id, diagnostics)
        accepted.add("defaultValue")
    else:
        attributes["default_value"] = text_attribute(record, "defaultValue", field_id, diagnostics)

    if field_type == FieldType.NUMBER_FIELD:
        attributes["min"] = number_attribute(record, "min", field_id, diagnostics)
        attributes["max"] = number_attribute(record, "max", field_id, diagnostics)
    elif field_type == FieldType.SELECT_FIELD:
        attributes["options"] = string_list_attribute(record, "options", field_id, diagnostics)
        attributes["multiple"] = flag_attribute(record, "multiple")
    elif field_type == FieldType.RADIO_FIELD:
        attributes["options"] = string_list_attribute(record, "options", field_id, diagnostics)
    elif field_type == FieldType.DATE_FIELD:
        attributes["min_date"] = optional_text_attribute(record, "minDate", field_id, diagnostics)
        attributes["max_date"] = optional_text_attribute(record, "maxDate", field_id, diagnostics)

    _report_unknown_attributes(record, field_class, field_id, diagnostics, accepted)
    return field_class(**attributes)


def deserialize_form_page(
    record: Mapping[str, Any],
    position: int = 0,
    diagnostics: DiagnosticReport | None = None,
) -> FormPage:
    """Reconstruct a page; ``position`` is used when the record has no order."""
    raw_fields = record.get("fields")
    if not isinstance(raw_fields, list):
        raw_fields = []

    order = record.get("order")
    if not isinstance(order, int) or isinstance(order, bool):
        order = position

    return FormPage(
        id=text_attribute(record, "id", diagnostics=diagnostics),
        title=text_attribute(record, "title", diagnostics=diagnostics),
        fields=[deserialize_form_field(field, diagnostics) for field in raw_fields],
        order=order,
    )


def deserialize_layout(raw: Any, diagnostics: DiagnosticReport | None = None) -> FormLayout:
    if not isinstance(raw, Mapping):
        if raw is not None:
            report_diagnostic(diagnostics, "invalid_layout", "Layout is not a mapping; using the default layout")
        return FormLayout()
    try:
        return FormLayout.model_validate(dict(raw))
    except ValidationError as exc:
        report_diagnostic(
            diagnostics,
            "invalid_layout",
            f"Layout could not be read ({exc.error_count()} error(s)); using the default layout",
        )
        return FormLayout()


def deserialize_form_schema(
    record: Mapping[str, Any],
    diagnostics: DiagnosticReport | None = None,
) -> FormSchema:
    """
    Reconstruct a whole form from its storage record.

    Example:
        >>> report = DiagnosticReport()
        >>> schema = deserialize_form_schema(record, diagnostics=report)
        >>> report.codes()
        ['legacy_list_encoding']
    """
    if not isinstance(record, Mapping):
        report_diagnostic(diagnostics, "invalid_record", "Form record is not a mapping")
        record = {}

    raw_pages = record.get("pages")
    if not isinstance(raw_pages, list):
        raw_pages = []

    pages = [
        deserialize_form_page(page, position, diagnostics)
        for position, page in enumerate(raw_pages)
        if isinstance(page, Mapping)
    ]
    schema = FormSchema(
        pages=pages,
        layout=deserialize_layout(record.get("layout"), diagnostics),
        is_shuffle_enabled=flag_attribute(record, "isShuffleEnabled"),
    )
    logger.debug("Decoded form schema with %d page(s)", len(schema.pages))
    return schema
