"""Tests for the serialization codec and its compatibility shims."""

import logging

import pytest

from form_schema.codec import (
    deserialize_form_field,
    deserialize_form_schema,
    serialize_form_field,
    serialize_form_schema,
)
from form_schema.diagnostics import DiagnosticReport
from form_schema.models.field_types import FieldType
from form_schema.models.fields import (
    CheckboxField,
    CheckboxFieldValidation,
    DateField,
    EmailField,
    FillableFormFieldValidation,
    FormField,
    NumberField,
    RadioField,
    RichTextFormField,
    SelectField,
    TextAreaField,
    TextFieldValidation,
    TextInputField,
)
from form_schema.models.form import FormLayout, FormPage, FormSchema

SAMPLE_FIELDS = [
    TextInputField(
        id="name",
        label="Name",
        hint="As on your passport",
        placeholder="Jane Doe",
        validation=TextFieldValidation(required=True, minLength=2, maxLength=80),
    ),
    TextAreaField(id="bio", label="Bio", default_value="Hello", validation=TextFieldValidation(maxLength=500)),
    EmailField(id="email", label="Email", prefix="@"),
    NumberField(id="age", label="Age", min=0, max=120.5, default_value="30"),
    SelectField(id="size", label="Size", options=["S", "M", "L"], default_value="M"),
    SelectField(id="tags", label="Tags", options=["x", "y"], multiple=True, default_value="x, y"),
    RadioField(id="yes", label="Agree?", options=["Yes", "No"]),
    CheckboxField(
        id="fruit",
        label="Fruit",
        options=["Apple", "Pear"],
        default_value=["Apple"],
        validation=CheckboxFieldValidation(minSelections=1, maxSelections=2),
    ),
    DateField(id="when", label="When", min_date="2024-01-01", max_date="2024-12-31", default_value="2024-06-15"),
    RichTextFormField(id="intro", content="<p>Welcome</p>"),
]


class TestEncode:
    """Tests for field encoding."""

    def test_wire_names_and_discriminators(self):
        """Test that encoding uses wire names and both discriminator keys."""
        record = serialize_form_field(SAMPLE_FIELDS[-2])
        assert record["type"] == "date_field"
        assert record["__type"] == "date_field"
        assert record["minDate"] == "2024-01-01"
        assert record["defaultValue"] == "2024-06-15"
        assert record["validation"] == {"required": False, "type": "fillable_form_field"}

    def test_checkbox_defaults_encoded_as_list(self):
        """Test that checkbox defaults are written under defaultValues."""
        record = serialize_form_field(SAMPLE_FIELDS[7])
        assert record["defaultValues"] == ["Apple"]
        assert "defaultValue" not in record
        assert record["validation"]["maxSelections"] == 2

    def test_rich_text_has_no_fillable_attributes(self):
        """Test that display-only fields encode content only."""
        record = serialize_form_field(SAMPLE_FIELDS[-1])
        assert set(record) == {"id", "type", "content", "__type"}


class TestRoundTrip:
    """Tests for lossless encode/decode."""

    @pytest.mark.parametrize("field", SAMPLE_FIELDS, ids=lambda field: field.type.value)
    def test_field_round_trip(self, field):
        """Test decode(encode(field)) equals the field, with no repairs."""
        report = DiagnosticReport()
        restored = deserialize_form_field(serialize_form_field(field), diagnostics=report)
        assert restored == field
        assert type(restored) is type(field)
        assert report.count == 0

    def test_date_strings_survive_two_trips(self):
        """Test date bounds and default are byte-identical after re-encoding."""
        field = SAMPLE_FIELDS[-2]
        first = serialize_form_field(field)
        second = serialize_form_field(deserialize_form_field(first))
        for key in ("minDate", "maxDate", "defaultValue"):
            assert first[key] == second[key]
        assert second["minDate"] == "2024-01-01"
        assert second["maxDate"] == "2024-12-31"
        assert second["defaultValue"] == "2024-06-15"

    def test_schema_round_trip(self):
        """Test whole-form encode/decode."""
        schema = FormSchema(
            pages=[
                FormPage(id="p1", title="One", fields=SAMPLE_FIELDS[:5]),
                FormPage(id="p2", title="Two", order=1, fields=SAMPLE_FIELDS[5:]),
            ],
            layout=FormLayout(theme="dark", customCTAButtonName="Send", legacyFlag=True),
            isShuffleEnabled=True,
        )
        record = serialize_form_schema(schema)
        assert record["isShuffleEnabled"] is True
        assert record["layout"]["customCTAButtonName"] == "Send"

        report = DiagnosticReport()
        restored = deserialize_form_schema(record, diagnostics=report)
        assert restored == schema
        assert report.count == 0

    def test_encoding_is_idempotent(self):
        """Test that re-encoding a decoded record yields the same record."""
        for field in SAMPLE_FIELDS:
            record = serialize_form_field(field)
            assert serialize_form_field(deserialize_form_field(record)) == record


class TestDecodeShims:
    """Tests for legacy representations and permissive decoding."""

    def test_unknown_discriminator(self):
        """Test that an unknown kind decodes to a bare field without raising."""
        report = DiagnosticReport()
        field = deserialize_form_field(
            {"id": "w1", "type": "weird_field", "label": "Odd", "options": ["a"]},
            diagnostics=report,
        )
        assert type(field) is FormField
        assert field.id == "w1"
        assert field.type == FieldType.FORM_FIELD
        assert report.codes() == ["unknown_field_type"]

    def test_missing_discriminator(self):
        """Test a record without any kind tag."""
        report = DiagnosticReport()
        field = deserialize_form_field({"id": "m1", "label": "Lost"}, diagnostics=report)
        assert field == FormField(id="m1")
        assert report.codes() == ["missing_discriminator"]

    def test_legacy_discriminator_key(self):
        """Test that __type alone is enough to dispatch."""
        field = deserialize_form_field({"id": "e", "__type": "email_field", "label": "Email"})
        assert isinstance(field, EmailField)
        assert field.label == "Email"

    def test_type_preferred_over_legacy_key(self):
        """Test that type wins when the two keys disagree."""
        report = DiagnosticReport()
        field = deserialize_form_field(
            {"id": "n", "type": "number_field", "__type": "text_input_field"},
            diagnostics=report,
        )
        assert isinstance(field, NumberField)
        assert report.codes() == ["conflicting_discriminator"]

    def test_legacy_checkbox_string(self):
        """Test comma-joined checkbox defaults under the legacy key."""
        report = DiagnosticReport()
        field = deserialize_form_field(
            {
                "id": "c",
                "__type": "checkbox_field",
                "label": "Pick",
                "options": ["A", "B"],
                "defaultValue": " A, B ,, ",
            },
            diagnostics=report,
        )
        assert isinstance(field, CheckboxField)
        assert field.default_value == ["A", "B"]
        assert report.codes() == ["legacy_list_encoding"]

    def test_checkbox_string_under_current_key(self):
        """Test comma-joined checkbox defaults under defaultValues."""
        field = deserialize_form_field(
            {"id": "c", "type": "checkbox_field", "options": ["A", "B"], "defaultValues": "B"}
        )
        assert field.default_value == ["B"]

    def test_non_numeric_bounds_dropped(self):
        """Test that unparseable number bounds become None."""
        report = DiagnosticReport()
        field = deserialize_form_field(
            {"id": "n", "type": "number_field", "label": "N", "min": "abc", "max": "10"},
            diagnostics=report,
        )
        assert field.min is None
        assert field.max == 10.0
        assert report.codes() == ["unparseable_number"]
        assert report.diagnostics[0].attribute == "min"

    def test_missing_optional_attributes(self):
        """Test empty defaults for attributes the record omits."""
        field = deserialize_form_field({"id": "t", "type": "text_input_field"})
        assert field.label == ""
        assert field.default_value == ""
        assert field.placeholder == ""
        assert field.validation == TextFieldValidation()

    def test_validation_rebuilt_per_kind(self):
        """Test kind-aware reconstruction of validation objects."""
        validation = {"required": True, "minLength": 3, "maxSelections": 2}
        text = deserialize_form_field({"id": "t", "type": "text_area_field", "validation": validation})
        checkbox = deserialize_form_field({"id": "c", "type": "checkbox_field", "validation": validation})
        email = deserialize_form_field({"id": "e", "type": "email_field", "validation": validation})

        assert text.validation == TextFieldValidation(required=True, minLength=3)
        assert checkbox.validation == CheckboxFieldValidation(required=True, maxSelections=2)
        assert type(email.validation) is FillableFormFieldValidation
        assert email.validation.required is True

    def test_unknown_attribute_dropped(self):
        """Test that attributes outside the kind are dropped and reported."""
        report = DiagnosticReport()
        field = deserialize_form_field(
            {"id": "e", "type": "email_field", "label": "Email", "options": ["x"]},
            diagnostics=report,
        )
        assert isinstance(field, EmailField)
        assert report.codes() == ["unknown_attribute"]
        assert report.for_field("e")[0].attribute == "options"

    def test_malformed_values_never_raise(self):
        """Test malformed records degrade instead of raising."""
        report = DiagnosticReport()
        assert deserialize_form_field("oops", diagnostics=report) == FormField(id="")
        field = deserialize_form_field(
            {"id": 7, "type": "select_field", "options": "A", "multiple": "true", "validation": "yes"},
            diagnostics=report,
        )
        assert isinstance(field, SelectField)
        assert field.id == "7"
        assert field.options == []
        assert field.multiple is True
        assert report.codes() == ["invalid_record", "invalid_attribute", "invalid_attribute"]

    def test_diagnostics_are_logged(self, caplog):
        """Test that repairs are mirrored to the package logger."""
        with caplog.at_level(logging.WARNING, logger="form_schema"):
            deserialize_form_field({"id": "w", "type": "weird_field"})
        assert "unknown_field_type" in caplog.text


class TestSchemaDecode:
    """Tests for whole-form decoding."""

    def test_page_order_defaults_to_position(self):
        """Test pages without an order take their list position."""
        schema = deserialize_form_schema({
            "pages": [
                {"id": "a", "fields": []},
                {"id": "b", "title": "Second", "fields": [{"id": "x", "type": "email_field"}]},
            ],
        })
        assert [page.order for page in schema.pages] == [0, 1]
        assert isinstance(schema.pages[1].fields[0], EmailField)
        assert schema.layout == FormLayout()
        assert schema.is_shuffle_enabled is False

    def test_unreadable_layout_replaced(self):
        """Test that a layout which cannot be read falls back to the default."""
        report = DiagnosticReport()
        schema = deserialize_form_schema({"pages": [], "layout": {"theme": 5}}, diagnostics=report)
        assert schema.layout == FormLayout()
        assert report.codes() == ["invalid_layout"]

    def test_layout_values_outside_enums_kept(self):
        """Test stored layout values are preserved as-is."""
        schema = deserialize_form_schema({"layout": {"theme": "neon", "code": "L7", "extra": 1}})
        assert schema.layout.theme == "neon"
        assert serialize_form_schema(schema)["layout"]["extra"] == 1
