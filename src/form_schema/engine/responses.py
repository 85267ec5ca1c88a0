"""
Validation of end-user answers against a page's fields.

Each page compiles into a pydantic model with one attribute per fillable
field (aliased to the field id), whose validator applies the field's answer
constraints: required, email format, numeric and date ranges, option
membership and selection counts.
"""

import logging
import re
from collections.abc import Callable, Mapping
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, ValidationError, create_model
from pydantic_core import PydanticCustomError

from form_schema.models.fields import (
    CheckboxField,
    DateField,
    EmailField,
    FillableFormField,
    NumberField,
    RadioField,
    SelectField,
    TextAreaField,
    TextInputField,
)
from form_schema.models.form import FormPage
from form_schema.models.validation_result import FieldValidationError, ValidationResult
from form_schema.parsing import is_blank, number_text, parse_date

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_UNSAFE_NAME = re.compile(r"\W")

AnswerCheck = Callable[[Any], Any]


def _fail(error_type: str, message: str) -> PydanticCustomError:
    return PydanticCustomError(error_type, message)


def _is_empty(value: Any) -> bool:
    return is_blank(value) or value == []


def _require(field: FillableFormField, value: Any, message: str | None = None) -> None:
    if field.validation.required and _is_empty(value):
        raise _fail("required", message or f"{field.label} is required")


def _expect_text(value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise _fail("invalid_type", "Expected a text answer")
    return value


def _expect_list(value: Any) -> list[str]:
    if value is None or value == "":
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise _fail("invalid_type", "Expected a list of selections")
    return value


def _check_options(field: SelectField | RadioField | CheckboxField, selected: list[str]) -> None:
    unknown = [item for item in selected if item not in field.options]
    if unknown:
        raise _fail("invalid_option", f"Invalid option selected: {', '.join(unknown)}")


# -- Per-kind answer checks --------------------------------------------------


def _text_check(field: TextInputField | TextAreaField) -> AnswerCheck:
    def check(value: Any) -> Any:
        _require(field, value)
        text = _expect_text(value)
        if not text:
            return text
        limits = field.validation
        if limits.min_length is not None and len(text) < limits.min_length:
            raise _fail("too_short", f"Must be at least {limits.min_length} characters")
        if limits.max_length is not None and len(text) > limits.max_length:
            raise _fail("too_long", f"Must be at most {limits.max_length} characters")
        return text

    return check


def _email_check(field: EmailField) -> AnswerCheck:
    def check(value: Any) -> Any:
        _require(field, value)
        text = _expect_text(value)
        if text and not EMAIL_PATTERN.match(text.strip()):
            raise _fail("invalid_email", "Please enter a valid email address")
        return text

    return check


def _range_message(label: str, minimum: float | None, maximum: float | None) -> str:
    parts = []
    if minimum is not None:
        parts.append(f"at least {number_text(minimum)}")
    if maximum is not None:
        parts.append(f"at most {number_text(maximum)}")
    return f"{label} must be {' and '.join(parts)}"


def _number_check(field: NumberField) -> AnswerCheck:
    def check(value: Any) -> Any:
        _require(field, value)
        if value is None or value == "":
            return None
        if isinstance(value, bool) or not isinstance(value, (int, float, str)):
            raise _fail("not_a_number", f"{field.label} must be a number")
        try:
            number = float(value)
        except ValueError:
            raise _fail("not_a_number", f"{field.label} must be a number") from None
        if (field.min is not None and number < field.min) or (field.max is not None and number > field.max):
            raise _fail("out_of_range", _range_message(field.label, field.min, field.max))
        return number

    return check


def _date_check(field: DateField) -> AnswerCheck:
    def check(value: Any) -> Any:
        _require(field, value)
        text = _expect_text(value)
        if not text:
            return text
        answer = parse_date(text)
        if answer is None:
            raise _fail("invalid_date", "Please enter a valid date")

        earliest, latest = parse_date(field.min_date), parse_date(field.max_date)
        if (earliest is not None and answer < earliest) or (latest is not None and answer > latest):
            parts = []
            if earliest is not None:
                parts.append(f"after {field.min_date}")
            if latest is not None:
                parts.append(f"before {field.max_date}")
            raise _fail("out_of_range", f"Date must be {' and '.join(parts)}")
        return text

    return check


def _choice_check(field: SelectField | RadioField) -> AnswerCheck:
    message = f"Please select a {field.label.lower()}"

    def check(value: Any) -> Any:
        _require(field, value, message)
        if isinstance(field, SelectField) and field.multiple:
            selected = _expect_list(value)
            _check_options(field, selected)
            return selected
        text = _expect_text(value)
        if text:
            _check_options(field, [text])
        return text

    return check


def _checkbox_check(field: CheckboxField) -> AnswerCheck:
    def check(value: Any) -> Any:
        _require(field, value, f"Please select at least one {field.label.lower()}")
        selected = _expect_list(value)
        if not selected:
            return selected
        _check_options(field, selected)
        limits = field.validation
        if limits.min_selections is not None and len(selected) < limits.min_selections:
            raise _fail("too_few_selections", f"Select at least {limits.min_selections} option(s)")
        if limits.max_selections is not None and len(selected) > limits.max_selections:
            raise _fail("too_many_selections", f"Select at most {limits.max_selections} option(s)")
        return selected

    return check


_CHECK_BUILDERS: dict[type, Callable[[Any], AnswerCheck]] = {
    TextInputField: _text_check,
    TextAreaField: _text_check,
    EmailField: _email_check,
    NumberField: _number_check,
    DateField: _date_check,
    SelectField: _choice_check,
    RadioField: _choice_check,
    CheckboxField: _checkbox_check,
}


# -- Page model --------------------------------------------------------------


def create_page_answer_model(page: FormPage) -> type[BaseModel]:
    """
    Compile a page into a pydantic model validating its answers.

    Attributes are named positionally (never colliding with a field id) and
    aliased to the field ids, since ids are arbitrary strings. Display-only
    fields get no attribute.
    """
    field_ids = {field.id for field in page.fields}
    attributes: dict[str, Any] = {}
    for index, field in enumerate(page.fields):
        build = _CHECK_BUILDERS.get(type(field))
        if build is None:
            continue
        name = f"field_{index}"
        while name in field_ids:
            name += "_"
        attributes[name] = (
            Annotated[Any, AfterValidator(build(field))],
            Field(default=None, alias=field.id, validate_default=True),
        )

    model_name = "Page_" + _UNSAFE_NAME.sub("_", page.id) + "_Answers"
    return create_model(
        model_name,
        __config__=ConfigDict(extra="ignore"),
        **attributes,
    )


def _answer_path(model: type[BaseModel], loc: tuple) -> str:
    # Missing answers are reported under the attribute name, not the alias
    if not loc:
        return ""
    head = str(loc[0])
    info = model.model_fields.get(head)
    if info is not None and info.alias:
        head = info.alias
    return ".".join([head, *(str(part) for part in loc[1:])])


def validate_page_data(page: FormPage, data: Mapping[str, Any]) -> ValidationResult:
    """
    Validate one page's answers.

    Args:
        page: The page being answered.
        data: Answers keyed by field id.

    Returns:
        ValidationResult with one error per failing field (path = field id)
        and, when valid, the cleaned answers keyed by field id.

    Example:
        >>> result = validate_page_data(page, {"email": "not-an-email"})
        >>> result.to_error_dict()
        {'email': ['Please enter a valid email address']}
    """
    model = create_page_answer_model(page)
    try:
        answers = model.model_validate(dict(data))
    except ValidationError as exc:
        errors = [
            FieldValidationError(
                path=_answer_path(model, item["loc"]),
                error_type=item["type"],
                message=item["msg"],
                received=item.get("input"),
            )
            for item in exc.errors()
        ]
        logger.debug("Page %s: %d invalid answer(s)", page.id, len(errors))
        return ValidationResult.from_errors(errors)

    return ValidationResult.from_errors([], answers.model_dump(by_alias=True))
