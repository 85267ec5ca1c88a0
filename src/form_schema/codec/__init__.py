"""
Serialization codec for form fields, pages and whole forms.

Encoding is lossless; decoding is permissive and reports every repair it
makes through an optional DiagnosticReport.
"""

from form_schema.codec.compat import LEGACY_TYPE_KEY, TYPE_KEY, resolve_field_type
from form_schema.codec.serializer import (
    build_validation,
    deserialize_form_field,
    deserialize_form_page,
    deserialize_form_schema,
    deserialize_layout,
    serialize_form_field,
    serialize_form_page,
    serialize_form_schema,
)

__all__ = [
    "LEGACY_TYPE_KEY",
    "TYPE_KEY",
    "resolve_field_type",
    "build_validation",
    "deserialize_form_field",
    "deserialize_form_page",
    "deserialize_form_schema",
    "deserialize_layout",
    "serialize_form_field",
    "serialize_form_page",
    "serialize_form_schema",
]
