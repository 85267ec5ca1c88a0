"""Tests for form-schema data models."""

import pytest
from pydantic import ValidationError

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
    FillableFormFieldValidation,
    FormField,
    NumberField,
    RichTextFormField,
    SelectField,
    TextFieldValidation,
    TextInputField,
    create_form_field,
)
from form_schema.models.form import FormLayout, FormPage, FormSchema
from form_schema.models.validation_result import (
    FieldValidationError,
    ValidationResult,
)


class TestFieldType:
    """Tests for kind tags and classification helpers."""

    def test_from_tag(self):
        """Test resolving raw tags."""
        assert FieldType.from_tag("number_field") is FieldType.NUMBER_FIELD
        assert FieldType.from_tag(FieldType.DATE_FIELD) is FieldType.DATE_FIELD
        assert FieldType.from_tag("weird_field") is None
        assert FieldType.from_tag(None) is None

    def test_classification(self):
        """Test kind classification helpers."""
        assert is_fillable_field_type("text_input_field")
        assert not is_fillable_field_type("rich_text_field")
        assert is_text_field_type("email_field")
        assert not is_text_field_type("number_field")
        assert is_multi_select_field_type("checkbox_field")
        assert not is_multi_select_field_type("radio_field")
        assert has_options_field_type("select_field")
        assert not has_options_field_type("date_field")

    def test_fillable_types(self):
        """Test that every fillable kind has a concrete class."""
        fillable = get_all_fillable_field_types()
        assert FieldType.RICH_TEXT_FIELD not in fillable
        assert all(kind in FIELD_CLASSES for kind in fillable)

    def test_display_names(self):
        """Test display names and the unknown fallback."""
        assert get_field_type_display_name("text_area_field") == "Long Text"
        assert get_field_type_display_name("select_field") == "Dropdown"
        assert get_field_type_display_name("weird_field") == "Unknown"
        assert get_field_type_display_name("form_field") == "Unknown"


class TestFormField:
    """Tests for field variant models."""

    def test_basic_field(self):
        """Test creating a field with defaults."""
        field = TextInputField(id="name", label="Name")
        assert field.type == FieldType.TEXT_INPUT_FIELD
        assert field.default_value == ""
        assert field.hint == ""
        assert isinstance(field.validation, TextFieldValidation)
        assert field.validation.required is False

    def test_wire_names_accepted(self):
        """Test that camelCase wire names populate snake_case attributes."""
        field = DateField(id="d", label="Date", minDate="2024-01-01", defaultValue="2024-06-15")
        assert field.min_date == "2024-01-01"
        assert field.default_value == "2024-06-15"

    def test_checkbox_defaults_are_a_list(self):
        """Test checkbox default values under both names."""
        by_alias = CheckboxField(id="c", label="Pick", options=["A", "B"], defaultValues=["A"])
        by_name = CheckboxField(id="c", label="Pick", options=["A", "B"], default_value=["A"])
        assert by_alias == by_name
        assert by_alias.default_value == ["A"]
        assert isinstance(by_alias.validation, CheckboxFieldValidation)

    def test_kind_tag_is_immutable(self):
        """Test that assigning the kind tag raises."""
        field = NumberField(id="n", label="Count")
        with pytest.raises(ValidationError):
            field.type = FieldType.EMAIL_FIELD
        assert field.type == FieldType.NUMBER_FIELD

    def test_mismatched_kind_tag_rejected(self):
        """Test that a class cannot be built with another kind's tag."""
        with pytest.raises(ValidationError):
            NumberField(id="n", type="email_field")

    def test_extra_attributes_rejected(self):
        """Test that a kind's attribute set is closed."""
        with pytest.raises(ValidationError):
            NumberField(id="n", label="Count", options=["a"])
        with pytest.raises(ValidationError):
            RichTextFormField(id="r", label="Not here")

    def test_settings_edit_validated(self):
        """Test in-place edits are validated on assignment."""
        field = NumberField(id="n", label="Count")
        field.min = 3
        assert field.min == 3.0
        with pytest.raises(ValidationError):
            field.min = "not a number"

    def test_validation_kind_tags(self):
        """Test validation objects carry their own tags."""
        assert FillableFormFieldValidation().type == FieldType.FILLABLE_FORM_FIELD
        assert TextFieldValidation(minLength=1).type == FieldType.TEXT_FIELD_VALIDATION
        assert CheckboxFieldValidation(maxSelections=2).max_selections == 2


class TestCreateFormField:
    """Tests for the field constructor by kind."""

    def test_create_by_tag(self):
        """Test building a variant from a raw tag."""
        field = create_form_field("number_field", id="age", label="Age", min=0, max=120)
        assert isinstance(field, NumberField)
        assert field.max == 120.0

    def test_create_by_enum(self):
        """Test building a variant from an enum member."""
        field = create_form_field(FieldType.SELECT_FIELD, id="s", options=["x"], multiple=True)
        assert isinstance(field, SelectField)
        assert field.multiple is True

    def test_unknown_kind_raises(self):
        """Test that constructing an unknown kind is an error."""
        with pytest.raises(ValueError):
            create_form_field("weird_field", id="w")
        with pytest.raises(ValueError):
            create_form_field("form_field", id="w")


class TestFormStructure:
    """Tests for pages, schemas and layouts."""

    def test_page_keeps_concrete_fields(self):
        """Test that pages hold field variants, not bare base fields."""
        page = FormPage(
            id="p1",
            title="About you",
            fields=[TextInputField(id="name", label="Name"), NumberField(id="age", label="Age")],
        )
        assert isinstance(page.get_field("age"), NumberField)
        assert page.get_field("missing") is None
        assert page.field_ids() == ["name", "age"]

    def test_schema_lookup(self):
        """Test page lookup and field flattening."""
        schema = FormSchema(
            pages=[
                FormPage(id="p1", fields=[TextInputField(id="a", label="A")]),
                FormPage(id="p2", order=1, fields=[FormField(id="b")]),
            ],
            isShuffleEnabled=True,
        )
        assert schema.is_shuffle_enabled is True
        assert schema.get_page("p2").order == 1
        assert [field.id for field in schema.all_fields()] == ["a", "b"]

    def test_layout_defaults(self):
        """Test default layout values."""
        layout = FormLayout()
        assert layout.theme == "light"
        assert layout.code == "L1"
        assert layout.page_mode == "multipage"
        assert layout.custom_cta_button_name is None

    def test_layout_is_lenient(self):
        """Test stored layouts keep values outside the enums and unknown keys."""
        layout = FormLayout(theme="neon", code="L12", legacyFlag=True)
        assert layout.theme == "neon"
        assert layout.model_extra == {"legacyFlag": True}
        assert layout.model_dump(by_alias=True)["legacyFlag"] is True


class TestValidationResult:
    """Tests for ValidationResult model."""

    def test_valid_result(self):
        """Test valid validation result."""
        result = ValidationResult(
            is_valid=True,
            validated_data={"label": "Email"},
        )
        assert result.is_valid
        assert result.error_count == 0

    def test_from_errors(self):
        """Test validity follows from the error list."""
        error = FieldValidationError(path="max", error_type="refinement", message="Too small")
        result = ValidationResult.from_errors([error], {"max": 1})
        assert not result.is_valid
        assert result.validated_data is None
        assert len(result.get_field_errors("max")) == 1

    def test_error_dict_conversion(self):
        """Test converting errors to dict format."""
        result = ValidationResult.from_errors([
            FieldValidationError(path="label", error_type="too_short", message="Field label is required"),
            FieldValidationError(path="label", error_type="too_long", message="Label is too long"),
            FieldValidationError(path="validation.maxLength", error_type="too_small", message="Too small"),
        ])
        error_dict = result.to_error_dict()
        assert len(error_dict["label"]) == 2
        assert error_dict["validation.maxLength"] == ["Too small"]

    def test_prefix_and_merge(self):
        """Test nesting error paths and merging results."""
        field_result = ValidationResult.from_errors([
            FieldValidationError(path="max", error_type="refinement", message="Bad range"),
        ])
        merged = ValidationResult(is_valid=True).merge(field_result.with_prefix("fields.0"))
        assert not merged.is_valid
        assert merged.errors[0].path == "fields.0.max"
        assert merged.messages() == ["Bad range"]
