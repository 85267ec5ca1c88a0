"""
Validation entry points for live field instances, whole forms and layouts.
"""

import logging
from typing import Any

from form_schema.models.fields import (
    CheckboxField,
    DateField,
    FillableFormField,
    FormField,
    NumberField,
    RadioField,
    RichTextFormField,
    SelectField,
    TextFieldValidation,
)
from form_schema.models.form import FormLayout, FormPage, FormSchema
from form_schema.models.validation_result import FieldValidationError, ValidationResult
from form_schema.validation.schemas import FORM_LAYOUT_SCHEMA, get_field_validation_schema

logger = logging.getLogger(__name__)


def field_to_settings_data(field: FormField) -> dict[str, Any]:
    """
    Project a field instance onto the settings-data shape its schema checks.

    Args:
        field: Any field instance.

    Returns:
        Wire-shaped dict (camelCase keys) with the attributes a builder edits.
    """
    if isinstance(field, RichTextFormField):
        return {"content": field.content}
    if not isinstance(field, FillableFormField):
        return {}

    data: dict[str, Any] = {
        "label": field.label,
        "hint": field.hint,
        "placeholder": field.placeholder,
        "defaultValue": field.default_value,
        "prefix": field.prefix,
        "required": field.validation.required,
    }

    if isinstance(field.validation, TextFieldValidation):
        data["validation"] = {
            "minLength": field.validation.min_length,
            "maxLength": field.validation.max_length,
        }
    if isinstance(field, NumberField):
        data["min"] = field.min
        data["max"] = field.max
    elif isinstance(field, SelectField):
        data["options"] = list(field.options)
        data["multiple"] = field.multiple
    elif isinstance(field, RadioField):
        data["options"] = list(field.options)
    elif isinstance(field, CheckboxField):
        data["options"] = list(field.options)
        data["defaultValue"] = list(field.default_value)
        data["validation"] = {
            "minSelections": field.validation.min_selections,
            "maxSelections": field.validation.max_selections,
        }
    elif isinstance(field, DateField):
        data["minDate"] = field.min_date
        data["maxDate"] = field.max_date
    return data


def validate_field(field: FormField) -> ValidationResult:
    """
    Validate a field instance against its kind's schema.

    Bare base fields (e.g. decoded from an unknown record) carry nothing to
    validate and are always valid.
    """
    if not isinstance(field, (FillableFormField, RichTextFormField)):
        return ValidationResult(is_valid=True)
    schema = get_field_validation_schema(field.type)
    return schema.validate(field_to_settings_data(field))


def validate_page(page: FormPage) -> ValidationResult:
    """Validate every field of a page and check that field ids are unique."""
    errors: list[FieldValidationError] = []
    seen: set[str] = set()

    for index, field in enumerate(page.fields):
        if field.id in seen:
            errors.append(FieldValidationError(
                path=f"fields.{index}.id",
                error_type="duplicate_id",
                message=f"Duplicate field id '{field.id}'",
                received=field.id,
            ))
        seen.add(field.id)
        errors.extend(validate_field(field).with_prefix(f"fields.{index}").errors)

    return ValidationResult.from_errors(errors)


def validate_form_schema(schema: FormSchema) -> ValidationResult:
    """
    Validate a whole form: every field of every page plus the layout.

    Error paths are nested as ``pages.<i>.fields.<j>.<attribute>`` and
    ``layout.<attribute>``.
    """
    results = [validate_page(page).with_prefix(f"pages.{index}") for index, page in enumerate(schema.pages)]
    results.append(validate_form_layout(schema.layout).with_prefix("layout"))

    merged = ValidationResult(is_valid=True).merge(*results)
    if not merged.is_valid:
        logger.info("Form schema has %d validation error(s)", merged.error_count)
    return merged


def validate_form_layout(layout: FormLayout) -> ValidationResult:
    """Validate a layout's enum values, colors, code and lengths."""
    return FORM_LAYOUT_SCHEMA.validate(layout.model_dump(by_alias=True, exclude_none=True))
