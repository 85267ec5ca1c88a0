"""
Per-kind validation schemas and the schema factory.

Schemas validate a field's *settings data*: the wire-shaped attributes a
builder edits (``label``, ``defaultValue``, ``min``, ``options``,
``validation.maxSelections``...). Every fillable kind starts from
BASE_FIELD_SCHEMA and extends or omits attributes from it.
"""

from collections.abc import Callable, Mapping
from typing import Annotated, Any, Literal

from form_schema.models.field_types import FieldType
from form_schema.parsing import is_blank, parse_date, parse_number, split_list_value
from form_schema.validation.rules import (
    FieldValidationSchema,
    Refinement,
    at_least,
    compile_rules,
    get_path,
    list_or_text,
    matches,
    max_length,
    min_length,
    numeric_or_numeric_text,
    satisfies,
    valid_date,
)


# -- Refinement predicates ---------------------------------------------------


def _ordered(low_path: str, high_path: str, parse: Callable[[Any], Any]) -> Callable[[Mapping[str, Any]], bool]:
    """
    Predicate for ``low <= high``.

    Not applicable (True) when either side is absent, blank or unparseable.
    """

    def predicate(data: Mapping[str, Any]) -> bool:
        low, high = get_path(data, low_path), get_path(data, high_path)
        if is_blank(low) or is_blank(high):
            return True
        low_value, high_value = parse(low), parse(high)
        if low_value is None or high_value is None:
            return True
        return low_value <= high_value

    return predicate


def _non_blank_options(data: Mapping[str, Any]) -> list[str] | None:
    options = data.get("options")
    if not isinstance(options, list):
        return None
    return [option for option in options if isinstance(option, str) and option.strip()]


def _options_unique(data: Mapping[str, Any]) -> bool:
    options = _non_blank_options(data)
    if options is None:
        return True
    return len(set(options)) == len(options)


def _invalid_defaults(data: Mapping[str, Any]) -> list[str]:
    options = _non_blank_options(data)
    if not options:
        return []
    return [value for value in split_list_value(data.get("defaultValue")) if value not in options]


def _defaults_are_options(data: Mapping[str, Any]) -> bool:
    return not _invalid_defaults(data)


def _invalid_defaults_message(data: Mapping[str, Any]) -> str:
    return f"Invalid default values: {', '.join(_invalid_defaults(data))} (not in options)"


def _single_default_is_option(data: Mapping[str, Any]) -> bool:
    if data.get("multiple") is True:
        return _defaults_are_options(data)
    default = data.get("defaultValue")
    options = _non_blank_options(data)
    if not isinstance(default, str) or not default or not options:
        return True
    return default in options


def _max_selections_within_options(data: Mapping[str, Any]) -> bool:
    options = _non_blank_options(data)
    maximum = parse_number(get_path(data, "validation.maxSelections"))
    if options is None or maximum is None:
        return True
    return maximum <= len(options)


def _default_length_within_limits(data: Mapping[str, Any]) -> bool:
    default = data.get("defaultValue")
    if not isinstance(default, str) or not default:
        return True
    minimum = parse_number(get_path(data, "validation.minLength"))
    maximum = parse_number(get_path(data, "validation.maxLength"))
    if minimum is not None and len(default) < minimum:
        return False
    if maximum is not None and len(default) > maximum:
        return False
    return True


# -- Base schema -------------------------------------------------------------

BASE_FIELD_SCHEMA = FieldValidationSchema(
    "base_field",
    {
        "label": (
            Annotated[str, min_length(1, "Field label is required"), max_length(200, "Label is too long")],
            ...,
        ),
        "hint": (Annotated[str | None, max_length(500, "Help text is too long")], None),
        "placeholder": (Annotated[str | None, max_length(100, "Placeholder is too long")], None),
        "defaultValue": (Annotated[str | None, max_length(1000, "Default value is too long")], None),
        "prefix": (Annotated[str | None, max_length(10, "Prefix is too long")], None),
        "required": (bool, False),
    },
)

# -- Text kinds --------------------------------------------------------------

TextLimitsRules = compile_rules("text_limits", {
    "minLength": (Annotated[int | None, at_least(0, "Minimum length must be 0 or greater")], None),
    "maxLength": (Annotated[int | None, at_least(1, "Maximum length must be 1 or greater")], None),
})

_TEXT_REFINEMENTS = (
    Refinement(
        _ordered("validation.minLength", "validation.maxLength", parse_number),
        "validation.maxLength",
        "Minimum length must be less than or equal to maximum length",
    ),
    Refinement(
        _default_length_within_limits,
        "defaultValue",
        "Default value must respect character length constraints",
    ),
)

TEXT_INPUT_FIELD_SCHEMA = BASE_FIELD_SCHEMA.extend(
    FieldType.TEXT_INPUT_FIELD.value,
    {"validation": (TextLimitsRules | None, None)},
    _TEXT_REFINEMENTS,
)

TEXT_AREA_FIELD_SCHEMA = BASE_FIELD_SCHEMA.extend(
    FieldType.TEXT_AREA_FIELD.value,
    {"validation": (TextLimitsRules | None, None)},
    _TEXT_REFINEMENTS,
)

EMAIL_FIELD_SCHEMA = BASE_FIELD_SCHEMA.extend(FieldType.EMAIL_FIELD.value)

# -- Number ------------------------------------------------------------------

NUMBER_FIELD_SCHEMA = BASE_FIELD_SCHEMA.extend(
    FieldType.NUMBER_FIELD.value,
    {
        "min": (Annotated[Any, numeric_or_numeric_text("Minimum must be a valid number")], None),
        "max": (Annotated[Any, numeric_or_numeric_text("Maximum must be a valid number")], None),
        "defaultValue": (
            Annotated[
                str | None,
                satisfies(lambda value: parse_number(value) is not None, "Default value must be a valid number"),
            ],
            None,
        ),
    },
    (
        Refinement(
            _ordered("min", "max", parse_number),
            "max",
            "Minimum value must be less than or equal to maximum value",
        ),
        Refinement(
            _ordered("min", "defaultValue", parse_number),
            "defaultValue",
            "Default value must be greater than or equal to minimum value",
        ),
        Refinement(
            _ordered("defaultValue", "max", parse_number),
            "defaultValue",
            "Default value must be less than or equal to maximum value",
        ),
    ),
)

# -- Option kinds ------------------------------------------------------------

OptionText = Annotated[
    str,
    min_length(1, "Option text cannot be empty"),
    max_length(100, "Option is too long (max 100 characters)"),
]

_UNIQUE_OPTIONS = Refinement(_options_unique, "options", "Duplicate options are not allowed")

SELECT_FIELD_SCHEMA = BASE_FIELD_SCHEMA.omit("placeholder").extend(
    FieldType.SELECT_FIELD.value,
    {
        "options": (Annotated[list[OptionText], min_length(1, "Add at least one option for the dropdown")], ...),
        "multiple": (bool, False),
        "defaultValue": (
            Annotated[str | list[str] | None, list_or_text("Default value must be an option or a list of options")],
            None,
        ),
    },
    (
        _UNIQUE_OPTIONS,
        Refinement(_single_default_is_option, "defaultValue", "Default value must be a valid option"),
    ),
)

RADIO_FIELD_SCHEMA = BASE_FIELD_SCHEMA.omit("placeholder").extend(
    FieldType.RADIO_FIELD.value,
    {
        "options": (
            Annotated[list[OptionText], min_length(2, "Radio fields need at least 2 options to choose from")],
            ...,
        ),
    },
    (
        _UNIQUE_OPTIONS,
        Refinement(_single_default_is_option, "defaultValue", "Default value must be a valid option"),
    ),
)

SelectionLimitsRules = compile_rules("selection_limits", {
    "minSelections": (Annotated[int | None, at_least(0, "Minimum selections must be 0 or greater")], None),
    "maxSelections": (Annotated[int | None, at_least(1, "Maximum selections must be 1 or greater")], None),
})

CHECKBOX_FIELD_SCHEMA = BASE_FIELD_SCHEMA.extend(
    FieldType.CHECKBOX_FIELD.value,
    {
        "options": (Annotated[list[OptionText], min_length(1, "Add at least one option for checkboxes")], ...),
        "defaultValue": (
            Annotated[Any, list_or_text("Default values must be a list or a comma-separated string")],
            None,
        ),
        "validation": (SelectionLimitsRules | None, None),
    },
    (
        Refinement(_defaults_are_options, "defaultValue", _invalid_defaults_message),
        Refinement(
            _ordered("validation.minSelections", "validation.maxSelections", parse_number),
            "validation.maxSelections",
            "Minimum selections must be less than or equal to maximum selections",
        ),
        Refinement(
            _max_selections_within_options,
            "validation.maxSelections",
            "Maximum selections cannot exceed the number of available options",
        ),
        _UNIQUE_OPTIONS,
    ),
)

# -- Date --------------------------------------------------------------------

DATE_FIELD_SCHEMA = BASE_FIELD_SCHEMA.extend(
    FieldType.DATE_FIELD.value,
    {
        "minDate": (Annotated[str | None, valid_date("Invalid minimum date format")], None),
        "maxDate": (Annotated[str | None, valid_date("Invalid maximum date format")], None),
        "defaultValue": (Annotated[str | None, valid_date("Default value must be a valid date")], None),
    },
    (
        Refinement(
            _ordered("minDate", "maxDate", parse_date),
            "maxDate",
            "Minimum date must be before or equal to maximum date",
        ),
        Refinement(
            _ordered("minDate", "defaultValue", parse_date),
            "defaultValue",
            "Default date must be after or equal to minimum date",
        ),
        Refinement(
            _ordered("defaultValue", "maxDate", parse_date),
            "defaultValue",
            "Default date must be before or equal to maximum date",
        ),
    ),
)

# -- Display-only ------------------------------------------------------------

RICH_TEXT_FIELD_SCHEMA = FieldValidationSchema(
    FieldType.RICH_TEXT_FIELD.value,
    {"content": (str, "")},
)

# -- Layout ------------------------------------------------------------------

_HEX_COLOR = r"#[0-9A-Fa-f]{6}"

FORM_LAYOUT_SCHEMA = FieldValidationSchema(
    "form_layout",
    {
        "theme": (Literal["light", "dark", "auto"], ...),
        "textColor": (Annotated[str, matches(_HEX_COLOR, "Invalid hex color format")], ...),
        "spacing": (Literal["compact", "normal", "spacious"], ...),
        "code": (Annotated[str, matches(r"L[1-9]", "Invalid layout code")], ...),
        "content": (Annotated[str, max_length(10000, "Content is too long")], ...),
        "customBackGroundColor": (Annotated[str, matches(_HEX_COLOR, "Invalid hex color format")], ...),
        "customCTAButtonName": (Annotated[str | None, max_length(50, "Button name is too long")], None),
        "backgroundImageKey": (Annotated[str, max_length(200, "Background image key is too long")], ...),
        "pageMode": (Literal["single_page", "multipage"], ...),
    },
)


# -- Factory -----------------------------------------------------------------

FIELD_VALIDATION_SCHEMAS: dict[FieldType, FieldValidationSchema] = {
    FieldType.TEXT_INPUT_FIELD: TEXT_INPUT_FIELD_SCHEMA,
    FieldType.TEXT_AREA_FIELD: TEXT_AREA_FIELD_SCHEMA,
    FieldType.EMAIL_FIELD: EMAIL_FIELD_SCHEMA,
    FieldType.NUMBER_FIELD: NUMBER_FIELD_SCHEMA,
    FieldType.SELECT_FIELD: SELECT_FIELD_SCHEMA,
    FieldType.RADIO_FIELD: RADIO_FIELD_SCHEMA,
    FieldType.CHECKBOX_FIELD: CHECKBOX_FIELD_SCHEMA,
    FieldType.DATE_FIELD: DATE_FIELD_SCHEMA,
    FieldType.RICH_TEXT_FIELD: RICH_TEXT_FIELD_SCHEMA,
}


def get_field_validation_schema(field_type: FieldType | str) -> FieldValidationSchema:
    """
    Get the validation schema for a field kind.

    Unknown tags get the permissive base schema; this never raises.

    Args:
        field_type: Kind tag (enum member or raw string).

    Returns:
        The kind's FieldValidationSchema.
    """
    kind = FieldType.from_tag(field_type)
    if kind is None:
        return BASE_FIELD_SCHEMA
    return FIELD_VALIDATION_SCHEMAS.get(kind, BASE_FIELD_SCHEMA)
