"""
Field kind tags and kind classification helpers.

Every record and every field instance carries one of these tags. The set of
concrete kinds is closed: adding a kind means extending the field models,
the validation schema factory, the codec and the value engine together.
"""

from enum import Enum


class FieldType(str, Enum):
    """Kind tag (discriminator) of a field or validation object."""

    TEXT = "text"
    TEXT_INPUT_FIELD = "text_input_field"
    EMAIL_FIELD = "email_field"
    NUMBER_FIELD = "number_field"
    TEXT_AREA_FIELD = "text_area_field"
    SELECT_FIELD = "select_field"
    CHECKBOX_FIELD = "checkbox_field"
    RADIO_FIELD = "radio_field"
    DATE_FIELD = "date_field"
    RICH_TEXT_FIELD = "rich_text_field"
    FORM_FIELD = "form_field"
    FILLABLE_FORM_FIELD = "fillable_form_field"
    NON_FILLABLE_FORM_FIELD = "non_fillable_form_field"
    TEXT_FIELD_VALIDATION = "text_field_validation"
    CHECKBOX_FIELD_VALIDATION = "checkbox_field_validation"

    @classmethod
    def from_tag(cls, tag: object) -> "FieldType | None":
        """Resolve a raw tag to a FieldType, or None if it is not a known tag."""
        if isinstance(tag, cls):
            return tag
        try:
            return cls(tag)
        except ValueError:
            return None


FILLABLE_FIELD_TYPES: tuple[FieldType, ...] = (
    FieldType.TEXT_INPUT_FIELD,
    FieldType.TEXT_AREA_FIELD,
    FieldType.NUMBER_FIELD,
    FieldType.EMAIL_FIELD,
    FieldType.DATE_FIELD,
    FieldType.SELECT_FIELD,
    FieldType.RADIO_FIELD,
    FieldType.CHECKBOX_FIELD,
)

TEXT_FIELD_TYPES: tuple[FieldType, ...] = (
    FieldType.TEXT_INPUT_FIELD,
    FieldType.TEXT_AREA_FIELD,
    FieldType.EMAIL_FIELD,
)

# Kinds whose validation object carries minLength/maxLength
LENGTH_BOUNDED_FIELD_TYPES: tuple[FieldType, ...] = (
    FieldType.TEXT_INPUT_FIELD,
    FieldType.TEXT_AREA_FIELD,
)

OPTION_FIELD_TYPES: tuple[FieldType, ...] = (
    FieldType.SELECT_FIELD,
    FieldType.RADIO_FIELD,
    FieldType.CHECKBOX_FIELD,
)

FIELD_TYPE_DISPLAY_NAMES: dict[FieldType, str] = {
    FieldType.TEXT_INPUT_FIELD: "Short Text",
    FieldType.TEXT_AREA_FIELD: "Long Text",
    FieldType.NUMBER_FIELD: "Number",
    FieldType.EMAIL_FIELD: "Email",
    FieldType.DATE_FIELD: "Date",
    FieldType.SELECT_FIELD: "Dropdown",
    FieldType.RADIO_FIELD: "Radio",
    FieldType.CHECKBOX_FIELD: "Checkbox",
    FieldType.RICH_TEXT_FIELD: "Rich Text",
}


def is_fillable_field_type(field_type: str) -> bool:
    """Check if a field type accepts user input."""
    return FieldType.from_tag(field_type) in FILLABLE_FIELD_TYPES


def is_text_field_type(field_type: str) -> bool:
    """Check if a field type holds free text."""
    return FieldType.from_tag(field_type) in TEXT_FIELD_TYPES


def is_multi_select_field_type(field_type: str) -> bool:
    """
    Check if a field type always stores a list of selections.

    Select fields store a list only when their ``multiple`` flag is set, which
    is an attribute of the instance rather than of the kind.
    """
    return FieldType.from_tag(field_type) == FieldType.CHECKBOX_FIELD


def has_options_field_type(field_type: str) -> bool:
    """Check if a field type has a predefined options list."""
    return FieldType.from_tag(field_type) in OPTION_FIELD_TYPES


def get_all_fillable_field_types() -> list[FieldType]:
    """Get all fillable field types."""
    return list(FILLABLE_FIELD_TYPES)


def get_field_type_display_name(field_type: str) -> str:
    """Get the English display name of a field type ("Unknown" if not displayable)."""
    kind = FieldType.from_tag(field_type)
    if kind is None:
        return "Unknown"
    return FIELD_TYPE_DISPLAY_NAMES.get(kind, "Unknown")
