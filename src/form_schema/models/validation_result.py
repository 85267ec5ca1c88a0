"""
Validation result models.

Validation never raises for data-shape problems: every fired rule becomes a
FieldValidationError and the caller receives all of them in one result.
"""

from typing import Any

from pydantic import BaseModel, Field


class FieldValidationError(BaseModel):
    """Validation error targeting one attribute path."""

    path: str = Field(..., description="Dotted attribute path, e.g. 'validation.maxSelections'")
    error_type: str = Field(..., description="Type of validation error")
    message: str = Field(..., description="Human-readable error message")
    received: Any | None = Field(default=None, description="Received value")


class ValidationResult(BaseModel):
    """Result of validating a field, a page or a whole form."""

    is_valid: bool = Field(..., description="Whether the data is valid")
    errors: list[FieldValidationError] = Field(
        default_factory=list, description="List of validation errors"
    )
    validated_data: dict[str, Any] | None = Field(
        default=None, description="Cleaned/validated data if valid"
    )

    @classmethod
    def from_errors(
        cls,
        errors: list[FieldValidationError],
        validated_data: dict[str, Any] | None = None,
    ) -> "ValidationResult":
        """Build a result whose validity follows from the error list."""
        return cls(
            is_valid=not errors,
            errors=errors,
            validated_data=validated_data if not errors else None,
        )

    @property
    def error_count(self) -> int:
        """Get the number of validation errors."""
        return len(self.errors)

    def get_field_errors(self, path: str) -> list[FieldValidationError]:
        """Get all errors for a specific attribute path."""
        return [e for e in self.errors if e.path == path]

    def messages(self) -> list[str]:
        """Get all error messages in report order."""
        return [e.message for e in self.errors]

    def to_error_dict(self) -> dict[str, list[str]]:
        """Convert errors to a dict mapping attribute paths to error messages."""
        result: dict[str, list[str]] = {}
        for error in self.errors:
            if error.path not in result:
                result[error.path] = []
            result[error.path].append(error.message)
        return result

    def with_prefix(self, prefix: str) -> "ValidationResult":
        """Return a copy whose error paths are nested under ``prefix``."""
        errors = [
            error.model_copy(update={"path": f"{prefix}.{error.path}" if error.path else prefix})
            for error in self.errors
        ]
        return ValidationResult(is_valid=self.is_valid, errors=errors, validated_data=self.validated_data)

    def merge(self, *others: "ValidationResult") -> "ValidationResult":
        """Combine this result with others; valid only if all are valid."""
        errors = list(self.errors)
        for other in others:
            errors.extend(other.errors)
        return ValidationResult(is_valid=not errors, errors=errors)
