"""
Data models for the form-schema package.

This module contains Pydantic models for:
- Field kinds and field variants
- Form structure (pages, layout)
- Validation results
"""

from form_schema.models.field_types import (
    FieldType,
    get_all_fillable_field_types,
    get_field_type_display_name,
    has_options_field_type,
    is_fillable_field_type,
    is_multi_select_field_type,
    is_text_field_type,
)
from form_schema.models.fields import (
    FIELD_CLASSES,
    CheckboxField,
    CheckboxFieldValidation,
    DateField,
    EmailField,
    FillableFormField,
    FillableFormFieldValidation,
    FormField,
    NonFillableFormField,
    NumberField,
    RadioField,
    RichTextFormField,
    SelectField,
    TextAreaField,
    TextFieldValidation,
    TextInputField,
    create_form_field,
)
from form_schema.models.form import (
    FormLayout,
    FormPage,
    FormSchema,
    PageModeType,
    SpacingType,
    ThemeType,
)
from form_schema.models.validation_result import (
    FieldValidationError,
    ValidationResult,
)

__all__ = [
    # Kinds
    "FieldType",
    "get_all_fillable_field_types",
    "get_field_type_display_name",
    "has_options_field_type",
    "is_fillable_field_type",
    "is_multi_select_field_type",
    "is_text_field_type",
    # Fields
    "FIELD_CLASSES",
    "FormField",
    "FillableFormField",
    "NonFillableFormField",
    "TextInputField",
    "TextAreaField",
    "EmailField",
    "NumberField",
    "SelectField",
    "RadioField",
    "CheckboxField",
    "DateField",
    "RichTextFormField",
    "FillableFormFieldValidation",
    "TextFieldValidation",
    "CheckboxFieldValidation",
    "create_form_field",
    # Form structure
    "FormLayout",
    "FormPage",
    "FormSchema",
    "PageModeType",
    "SpacingType",
    "ThemeType",
    # Validation
    "ValidationResult",
    "FieldValidationError",
]
