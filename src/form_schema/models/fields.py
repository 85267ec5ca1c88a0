"""
Field variant models.

The field hierarchy mirrors what a form builder stores for each field:

    FormField (base: id + kind tag)
    ├── FillableFormField (label, defaultValue, prefix, hint, placeholder, validation)
    │   ├── TextInputField / TextAreaField  (TextFieldValidation: minLength/maxLength)
    │   ├── EmailField
    │   ├── NumberField                     (min, max)
    │   ├── SelectField                     (options, multiple)
    │   ├── RadioField                      (options)
    │   ├── CheckboxField                   (options, defaultValues, CheckboxFieldValidation)
    │   └── DateField                       (minDate, maxDate)
    └── NonFillableFormField
        └── RichTextFormField               (content)

Attributes are snake_case in Python and camelCase on the wire; both names
are accepted on input. Extra attributes are rejected, so a field's attribute
set is exactly the one its kind declares. Fields are mutable (settings
edits are applied in place and validated on assignment) except for ``type``.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from form_schema.models.field_types import FieldType


class _KindTagged(BaseModel):
    """Shared config and kind-tag check for fields and validation objects."""

    model_config = ConfigDict(
        extra="forbid",
        populate_by_name=True,
        validate_assignment=True,
    )

    @model_validator(mode="after")
    def _check_kind(self) -> "_KindTagged":
        expected = type(self).model_fields["type"].default
        if self.type != expected:
            raise ValueError(
                f"{type(self).__name__} must have type '{expected.value}', got '{self.type}'"
            )
        return self

    @classmethod
    def kind(cls) -> FieldType:
        """Kind tag carried by every instance of this class."""
        return cls.model_fields["type"].default


# -- Validation rule-sets ----------------------------------------------------


class FillableFormFieldValidation(_KindTagged):
    """Base validation rule-set for fillable fields."""

    required: bool = Field(default=False, description="Whether an answer is required")
    type: FieldType = Field(default=FieldType.FILLABLE_FORM_FIELD, frozen=True)


class TextFieldValidation(FillableFormFieldValidation):
    """Validation for text input and text area fields (character limits)."""

    type: FieldType = Field(default=FieldType.TEXT_FIELD_VALIDATION, frozen=True)
    min_length: int | None = Field(default=None, alias="minLength", description="Minimum answer length")
    max_length: int | None = Field(default=None, alias="maxLength", description="Maximum answer length")


class CheckboxFieldValidation(FillableFormFieldValidation):
    """Validation for checkbox fields (selection-count limits)."""

    type: FieldType = Field(default=FieldType.CHECKBOX_FIELD_VALIDATION, frozen=True)
    min_selections: int | None = Field(default=None, alias="minSelections", description="Minimum selections")
    max_selections: int | None = Field(default=None, alias="maxSelections", description="Maximum selections")


# -- Field variants ----------------------------------------------------------


class FormField(_KindTagged):
    """
    Base form field.

    A bare FormField is also what an unrecognized record decodes to: it keeps
    only the id so the field can still be addressed and removed.
    """

    id: str = Field(..., description="Field id, unique within its page")
    type: FieldType = Field(default=FieldType.FORM_FIELD, frozen=True, description="Kind tag")


class FillableFormField(FormField):
    """Base class for fields that can be filled by users."""

    type: FieldType = Field(default=FieldType.FILLABLE_FORM_FIELD, frozen=True)
    label: str = Field(default="", description="Field label shown to the respondent")
    default_value: str = Field(default="", alias="defaultValue", description="Pre-filled value")
    prefix: str = Field(default="", description="Short prefix shown before the input")
    hint: str = Field(default="", description="Help text")
    placeholder: str = Field(default="", description="Placeholder text")
    validation: FillableFormFieldValidation = Field(default_factory=FillableFormFieldValidation)


class NonFillableFormField(FormField):
    """Base class for display-only fields."""

    type: FieldType = Field(default=FieldType.NON_FILLABLE_FORM_FIELD, frozen=True)


class TextInputField(FillableFormField):
    """Short text input with character limit support."""

    type: FieldType = Field(default=FieldType.TEXT_INPUT_FIELD, frozen=True)
    validation: TextFieldValidation = Field(default_factory=TextFieldValidation)


class TextAreaField(FillableFormField):
    """Long text input with character limit support."""

    type: FieldType = Field(default=FieldType.TEXT_AREA_FIELD, frozen=True)
    validation: TextFieldValidation = Field(default_factory=TextFieldValidation)


class EmailField(FillableFormField):
    type: FieldType = Field(default=FieldType.EMAIL_FIELD, frozen=True)


class NumberField(FillableFormField):
    """Number input with an optional [min, max] range."""

    type: FieldType = Field(default=FieldType.NUMBER_FIELD, frozen=True)
    min: float | None = Field(default=None, description="Minimum accepted value")
    max: float | None = Field(default=None, description="Maximum accepted value")


class SelectField(FillableFormField):
    """Dropdown; stores a list of selections when ``multiple`` is set."""

    type: FieldType = Field(default=FieldType.SELECT_FIELD, frozen=True)
    options: list[str] = Field(default_factory=list, description="Selectable options")
    multiple: bool = Field(default=False, description="Whether several options may be selected")


class RadioField(FillableFormField):
    type: FieldType = Field(default=FieldType.RADIO_FIELD, frozen=True)
    options: list[str] = Field(default_factory=list, description="Selectable options")


class CheckboxField(FillableFormField):
    """
    Checkbox group.

    The default is list-valued and stored under ``defaultValues``; legacy
    comma-joined strings are converted by the codec before construction.
    """

    type: FieldType = Field(default=FieldType.CHECKBOX_FIELD, frozen=True)
    default_value: list[str] = Field(
        default_factory=list,
        alias="defaultValues",
        description="Options checked by default",
    )
    options: list[str] = Field(default_factory=list, description="Selectable options")
    validation: CheckboxFieldValidation = Field(default_factory=CheckboxFieldValidation)


class DateField(FillableFormField):
    """Date input with an optional [minDate, maxDate] range (ISO strings)."""

    type: FieldType = Field(default=FieldType.DATE_FIELD, frozen=True)
    min_date: str | None = Field(default=None, alias="minDate", description="Earliest accepted date")
    max_date: str | None = Field(default=None, alias="maxDate", description="Latest accepted date")


class RichTextFormField(NonFillableFormField):
    """Display-only rich text block (HTML content)."""

    type: FieldType = Field(default=FieldType.RICH_TEXT_FIELD, frozen=True)
    content: str = Field(default="", description="Rich text HTML content")


# Closed kind -> class table; a new kind also needs a schema in validation.schemas.
FIELD_CLASSES: dict[FieldType, type[FormField]] = {
    FieldType.TEXT_INPUT_FIELD: TextInputField,
    FieldType.TEXT_AREA_FIELD: TextAreaField,
    FieldType.EMAIL_FIELD: EmailField,
    FieldType.NUMBER_FIELD: NumberField,
    FieldType.SELECT_FIELD: SelectField,
    FieldType.RADIO_FIELD: RadioField,
    FieldType.CHECKBOX_FIELD: CheckboxField,
    FieldType.DATE_FIELD: DateField,
    FieldType.RICH_TEXT_FIELD: RichTextFormField,
}


def create_form_field(field_type: FieldType | str, **attributes: Any) -> FormField:
    """
    Construct the field variant for a kind tag.

    Args:
        field_type: Kind tag of the field to build.
        **attributes: Field attributes (snake_case or wire names).

    Returns:
        The concrete field instance.

    Raises:
        ValueError: If the kind tag is not a concrete field kind.

    Example:
        >>> field = create_form_field("number_field", id="age", label="Age", min=0)
        >>> field.type
        <FieldType.NUMBER_FIELD: 'number_field'>
    """
    kind = FieldType.from_tag(field_type)
    if kind is None or kind not in FIELD_CLASSES:
        raise ValueError(f"Unknown field type: {field_type!r}")
    return FIELD_CLASSES[kind](**attributes)
