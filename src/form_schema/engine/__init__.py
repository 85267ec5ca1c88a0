"""
Value engine: initial values, submission normalization, answer validation
and display formatting.
"""

from form_schema.engine.defaults import (
    NO_DEFAULT,
    generate_field_default_value,
    generate_form_default_values,
    generate_page_default_values,
)
from form_schema.engine.formatters import (
    format_field_value,
    format_response_data,
    parse_formatted_value,
)
from form_schema.engine.responses import create_page_answer_model, validate_page_data
from form_schema.engine.transform import transform_field_value, transform_form_data_for_submission

__all__ = [
    "NO_DEFAULT",
    "generate_field_default_value",
    "generate_form_default_values",
    "generate_page_default_values",
    "format_field_value",
    "format_response_data",
    "parse_formatted_value",
    "create_page_answer_model",
    "validate_page_data",
    "transform_field_value",
    "transform_form_data_for_submission",
]
