"""
form-schema: the type system behind a form builder.

Field variants, per-kind validation schemas, a lossless storage codec and
the value engine that derives initial values and normalizes submissions.

Simple Usage:
    from form_schema import NumberField, validate_field

    field = NumberField(id="age", label="Age", min=10, max=5)
    result = validate_field(field)
    result.to_error_dict()
    # {'max': ['Minimum value must be less than or equal to maximum value']}

Storage:
    from form_schema import serialize_form_schema, deserialize_form_schema
    from form_schema.diagnostics import DiagnosticReport

    record = serialize_form_schema(schema)
    report = DiagnosticReport()
    restored = deserialize_form_schema(record, diagnostics=report)

    # Every repair made while decoding legacy records is in the report
    report.codes()

Values:
    from form_schema import generate_page_default_values, transform_form_data_for_submission

    defaults = generate_page_default_values(page)
    payload = transform_form_data_for_submission(page.fields, answers)

Logging:
    from form_schema.diagnostics import setup_logging

    setup_logging(level="INFO", file_path="form_schema.jsonl")
"""

from form_schema.codec import (
    deserialize_form_field,
    deserialize_form_page,
    deserialize_form_schema,
    serialize_form_field,
    serialize_form_page,
    serialize_form_schema,
)
from form_schema.diagnostics import (
    Diagnostic,
    DiagnosticReport,
    disable_logging,
    enable_logging,
    setup_logging,
)
from form_schema.engine import (
    NO_DEFAULT,
    format_field_value,
    format_response_data,
    generate_field_default_value,
    generate_form_default_values,
    generate_page_default_values,
    parse_formatted_value,
    transform_field_value,
    transform_form_data_for_submission,
    validate_page_data,
)
from form_schema.models import (
    CheckboxField,
    DateField,
    EmailField,
    FieldType,
    FieldValidationError,
    FillableFormField,
    FormField,
    FormLayout,
    FormPage,
    FormSchema,
    NumberField,
    RadioField,
    RichTextFormField,
    SelectField,
    TextAreaField,
    TextInputField,
    ValidationResult,
    create_form_field,
)
from form_schema.validation import (
    FieldValidationSchema,
    Refinement,
    get_field_validation_schema,
    validate_field,
    validate_form_layout,
    validate_form_schema,
    validate_page,
)

__all__ = [
    # Models
    "FieldType",
    "FormField",
    "FillableFormField",
    "TextInputField",
    "TextAreaField",
    "EmailField",
    "NumberField",
    "SelectField",
    "RadioField",
    "CheckboxField",
    "DateField",
    "RichTextFormField",
    "FormLayout",
    "FormPage",
    "FormSchema",
    "create_form_field",
    # Validation
    "FieldValidationSchema",
    "Refinement",
    "ValidationResult",
    "FieldValidationError",
    "get_field_validation_schema",
    "validate_field",
    "validate_form_layout",
    "validate_form_schema",
    "validate_page",
    # Codec
    "serialize_form_field",
    "serialize_form_page",
    "serialize_form_schema",
    "deserialize_form_field",
    "deserialize_form_page",
    "deserialize_form_schema",
    # Values
    "NO_DEFAULT",
    "generate_field_default_value",
    "generate_page_default_values",
    "generate_form_default_values",
    "transform_field_value",
    "transform_form_data_for_submission",
    "validate_page_data",
    "format_field_value",
    "format_response_data",
    "parse_formatted_value",
    # Logging
    "Diagnostic",
    "DiagnosticReport",
    "setup_logging",
    "disable_logging",
    "enable_logging",
]

__version__ = "0.1.0"
