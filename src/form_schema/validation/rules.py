"""
Building blocks for field validation schemas.

A FieldValidationSchema has two layers:

1. Per-attribute rules: an ordered mapping of attribute (wire) name to a
   ``(annotation, default)`` pair, compiled into a pydantic model. All
   attribute failures are reported together.
2. Refinements: an ordered list of ``(predicate, path, message)`` triples
   that compare attributes with each other. They run after the attribute
   rules, on the raw data, and every refinement runs regardless of what
   failed before it. A predicate returns True when the rule holds *or does
   not apply* (a referenced value is absent or unparseable).
"""

import logging
import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from functools import cached_property
from typing import Any

from pydantic import AfterValidator, BaseModel, ConfigDict, ValidationError, create_model
from pydantic_core import PydanticCustomError

from form_schema.models.validation_result import FieldValidationError, ValidationResult
from form_schema.parsing import NUMERIC_TEXT, parse_date

logger = logging.getLogger(__name__)

AttributeRule = tuple[Any, Any]
Message = str | Callable[[Mapping[str, Any]], str]


# -- Attribute validators ----------------------------------------------------
#
# Each helper returns an AfterValidator raising PydanticCustomError, so the
# message reaches the caller verbatim. None always passes: presence is
# decided by the annotation/default, not by these checks.


def min_length(limit: int, message: str) -> AfterValidator:
    def check(value: Any) -> Any:
        if value is not None and len(value) < limit:
            raise PydanticCustomError("too_short", message)
        return value

    return AfterValidator(check)


def max_length(limit: int, message: str) -> AfterValidator:
    def check(value: Any) -> Any:
        if value is not None and len(value) > limit:
            raise PydanticCustomError("too_long", message)
        return value

    return AfterValidator(check)


def at_least(minimum: float, message: str) -> AfterValidator:
    def check(value: Any) -> Any:
        if value is not None and value < minimum:
            raise PydanticCustomError("too_small", message)
        return value

    return AfterValidator(check)


def numeric_or_numeric_text(message: str) -> AfterValidator:
    """Accept a number, or a string made only of numeric characters."""

    def check(value: Any) -> Any:
        if value is None:
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return value
        if isinstance(value, str) and NUMERIC_TEXT.match(value):
            return value
        raise PydanticCustomError("not_numeric", message)

    return AfterValidator(check)


def satisfies(predicate: Callable[[Any], bool], message: str, error_type: str = "invalid") -> AfterValidator:
    """Generic check: ``predicate(value)`` must hold for non-empty values."""

    def check(value: Any) -> Any:
        if value is None or value == "":
            return value
        if not predicate(value):
            raise PydanticCustomError(error_type, message)
        return value

    return AfterValidator(check)


def matches(pattern: str, message: str) -> AfterValidator:
    compiled = re.compile(pattern)

    def check(value: Any) -> Any:
        if value is not None and not compiled.fullmatch(value):
            raise PydanticCustomError("pattern_mismatch", message)
        return value

    return AfterValidator(check)


def valid_date(message: str) -> AfterValidator:
    return satisfies(lambda value: parse_date(value) is not None, message, "invalid_date")


def list_or_text(message: str) -> AfterValidator:
    """Accept a list of strings or a (comma-joined) string."""

    def check(value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, list) and all(isinstance(item, str) for item in value):
            return value
        raise PydanticCustomError("invalid_list", message)

    return AfterValidator(check)


# -- Refinements -------------------------------------------------------------


@dataclass(frozen=True)
class Refinement:
    """Cross-field rule targeting one attribute path."""

    predicate: Callable[[Mapping[str, Any]], bool]
    path: str
    message: Message
    error_type: str = "refinement"

    def check(self, data: Mapping[str, Any]) -> FieldValidationError | None:
        """Run the rule; return an error only when it applies and fails."""
        if self.predicate(data):
            return None
        message = self.message(data) if callable(self.message) else self.message
        return FieldValidationError(
            path=self.path,
            error_type=self.error_type,
            message=message,
            received=get_path(data, self.path),
        )


def get_path(data: Mapping[str, Any], path: str) -> Any:
    """Read a dotted path ("validation.maxSelections") from nested mappings."""
    current: Any = data
    for part in path.split("."):
        if not isinstance(current, Mapping):
            return None
        current = current.get(part)
    return current


# -- Schema ------------------------------------------------------------------


def _error_path(loc: Sequence[Any]) -> str:
    return ".".join(str(part) for part in loc)


_UNSAFE_NAME = re.compile(r"\W")


class FieldValidationSchema:
    """
    Validation schema for one field kind's settings data.

    Schemas are immutable: ``extend``, ``omit`` and ``refine`` return new
    schemas, so a kind can build on the base rules without changing them.

    Example:
        >>> schema = get_field_validation_schema(FieldType.NUMBER_FIELD)
        >>> result = schema.validate({"label": "Age", "min": 10, "max": 5})
        >>> result.to_error_dict()
        {'max': ['Minimum value must be less than or equal to maximum value']}
    """

    def __init__(
        self,
        name: str,
        rules: Mapping[str, AttributeRule] | None = None,
        refinements: Sequence[Refinement] = (),
    ):
        self.name = name
        self._rules: dict[str, AttributeRule] = dict(rules or {})
        self._refinements: tuple[Refinement, ...] = tuple(refinements)

    def __repr__(self) -> str:
        return f"FieldValidationSchema({self.name!r}, attributes={list(self._rules)})"

    @property
    def attributes(self) -> tuple[str, ...]:
        """Attribute names checked by the per-attribute layer, in order."""
        return tuple(self._rules)

    @property
    def refinements(self) -> tuple[Refinement, ...]:
        return self._refinements

    def extend(
        self,
        name: str,
        rules: Mapping[str, AttributeRule] | None = None,
        refinements: Sequence[Refinement] = (),
    ) -> "FieldValidationSchema":
        """New schema with added (or replaced) attribute rules and refinements."""
        merged = dict(self._rules)
        merged.update(rules or {})
        return FieldValidationSchema(name, merged, self._refinements + tuple(refinements))

    def omit(self, *attributes: str, name: str | None = None) -> "FieldValidationSchema":
        """New schema without the given attribute rules."""
        kept = {key: rule for key, rule in self._rules.items() if key not in attributes}
        return FieldValidationSchema(name or self.name, kept, self._refinements)

    def refine(self, *refinements: Refinement) -> "FieldValidationSchema":
        """New schema with refinements appended after the existing ones."""
        return FieldValidationSchema(self.name, self._rules, self._refinements + refinements)

    @cached_property
    def model(self) -> type[BaseModel]:
        """Pydantic model enforcing the per-attribute rules."""
        return compile_rules(self.name, self._rules)

    def validate(self, data: Mapping[str, Any]) -> ValidationResult:
        """
        Validate settings data for this kind.

        Args:
            data: Wire-shaped attribute mapping (camelCase keys).

        Returns:
            ValidationResult carrying every fired attribute error followed
            by every fired refinement, in declaration order.
        """
        source: Mapping[str, Any] = data if isinstance(data, Mapping) else {}
        errors: list[FieldValidationError] = []
        validated: dict[str, Any] | None = None

        try:
            validated = self.model.model_validate(dict(source)).model_dump()
        except ValidationError as exc:
            for item in exc.errors():
                errors.append(FieldValidationError(
                    path=_error_path(item["loc"]),
                    error_type=item["type"],
                    message=item["msg"],
                    received=item.get("input"),
                ))

        for refinement in self._refinements:
            error = refinement.check(source)
            if error is not None:
                errors.append(error)

        if errors:
            logger.debug("%s: %d validation error(s)", self.name, len(errors))
        return ValidationResult.from_errors(errors, validated)


def compile_rules(name: str, rules: Mapping[str, AttributeRule]) -> type[BaseModel]:
    """Build the pydantic model for an attribute rule mapping."""
    model_name = _UNSAFE_NAME.sub("_", name) + "Rules"
    return create_model(
        model_name,
        __config__=ConfigDict(extra="ignore"),
        **dict(rules),
    )
