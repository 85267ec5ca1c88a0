"""
Initial-value derivation for form pages.

Each fillable field yields the value its input starts with. Number fields
whose declared default does not parse yield NO_DEFAULT and are left out of
the page map entirely, which keeps "no default" distinct from zero.
"""

from typing import Any

from form_schema.models.fields import (
    CheckboxField,
    FillableFormField,
    FormField,
    NumberField,
    SelectField,
)
from form_schema.models.form import FormPage, FormSchema
from form_schema.parsing import parse_number, split_list_value


class _NoDefault:
    """Marker for a field that has no initial value."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_DEFAULT"

    def __bool__(self) -> bool:
        return False


NO_DEFAULT = _NoDefault()


def generate_field_default_value(field: FormField) -> Any:
    """
    Derive the initial value of one field.

    Returns:
        A list of strings for checkbox and multi-select fields, a float (or
        NO_DEFAULT) for number fields, and a string for every other kind.
    """
    if not isinstance(field, FillableFormField):
        return ""

    if isinstance(field, CheckboxField):
        return split_list_value(field.default_value)
    if isinstance(field, SelectField) and field.multiple:
        return split_list_value(field.default_value)
    if isinstance(field, NumberField):
        number = parse_number(field.default_value)
        return NO_DEFAULT if number is None else number
    return field.default_value or ""


def generate_page_default_values(page: FormPage) -> dict[str, Any]:
    """
    Build the ``{field id: initial value}`` map for a page.

    Example:
        >>> page = FormPage(id="p1", fields=[SelectField(id="s", multiple=True, default_value="x, y")])
        >>> generate_page_default_values(page)
        {'s': ['x', 'y']}
    """
    values: dict[str, Any] = {}
    for field in page.fields:
        value = generate_field_default_value(field)
        if value is not NO_DEFAULT:
            values[field.id] = value
    return values


def generate_form_default_values(schema: FormSchema) -> dict[str, dict[str, Any]]:
    """Page id -> page default map, for every page of a form."""
    return {page.id: generate_page_default_values(page) for page in schema.pages}
