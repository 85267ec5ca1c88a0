"""
Validation schema factory and validation entry points.

Each field kind maps to a FieldValidationSchema: per-attribute rules
followed by ordered cross-field refinements. All fired failures are
collected into one ValidationResult; nothing here raises for bad data.
"""

from form_schema.validation.rules import (
    FieldValidationSchema,
    Refinement,
)
from form_schema.validation.schemas import (
    BASE_FIELD_SCHEMA,
    FORM_LAYOUT_SCHEMA,
    get_field_validation_schema,
)
from form_schema.validation.validators import (
    field_to_settings_data,
    validate_field,
    validate_form_layout,
    validate_form_schema,
    validate_page,
)

__all__ = [
    "FieldValidationSchema",
    "Refinement",
    "BASE_FIELD_SCHEMA",
    "FORM_LAYOUT_SCHEMA",
    "get_field_validation_schema",
    "field_to_settings_data",
    "validate_field",
    "validate_form_layout",
    "validate_form_schema",
    "validate_page",
]
