"""
Submission normalization.

Answers arrive from UI inputs in whatever shape the input produced. Before
submission they are coerced to the canonical shape for their field's kind.
The coercion never rejects a value: malformed answers degrade to an empty
or neutral value, and answers with no matching field pass through as-is.
Applying the transform to already transformed data changes nothing.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from form_schema.models.fields import CheckboxField, FormField, NumberField, SelectField

logger = logging.getLogger(__name__)


def transform_field_value(field: FormField, value: Any) -> Any:
    """Coerce one submitted answer to the canonical shape for its field."""
    if isinstance(field, NumberField):
        return None if value == "" else value
    if isinstance(field, CheckboxField) or (isinstance(field, SelectField) and field.multiple):
        return value if isinstance(value, list) else []
    return value if value else ""


def transform_form_data_for_submission(
    fields: Iterable[FormField],
    data: Mapping[str, Any],
) -> dict[str, Any]:
    """
    Normalize a page's (or form's) answers for submission.

    Args:
        fields: Fields the answers belong to.
        data: Answers keyed by field id.

    Returns:
        New dict with every answer coerced; unknown keys kept unchanged.

    Example:
        >>> transform_form_data_for_submission([NumberField(id="n")], {"n": ""})
        {'n': None}
    """
    by_id = {field.id: field for field in fields}
    transformed: dict[str, Any] = {}
    for key, value in data.items():
        field = by_id.get(key)
        transformed[key] = value if field is None else transform_field_value(field, value)

    unmatched = [key for key in data if key not in by_id]
    if unmatched:
        logger.debug("Passing through %d answer(s) with no matching field", len(unmatched))
    return transformed
