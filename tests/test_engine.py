"""Tests for initial-value derivation and submission normalization."""

from form_schema.engine import (
    NO_DEFAULT,
    generate_field_default_value,
    generate_form_default_values,
    generate_page_default_values,
    transform_field_value,
    transform_form_data_for_submission,
)
from form_schema.models.fields import (
    CheckboxField,
    DateField,
    EmailField,
    FormField,
    NumberField,
    RadioField,
    RichTextFormField,
    SelectField,
    TextInputField,
)
from form_schema.models.form import FormPage, FormSchema


def make_page() -> FormPage:
    return FormPage(
        id="p1",
        title="Everything",
        fields=[
            TextInputField(id="name", label="Name", default_value="Jane"),
            EmailField(id="email", label="Email"),
            NumberField(id="age", label="Age", default_value="42"),
            NumberField(id="score", label="Score"),
            SelectField(id="size", label="Size", options=["S", "M"], default_value="M"),
            SelectField(id="tags", label="Tags", options=["x", "y"], multiple=True, default_value="x, y"),
            RadioField(id="agree", label="Agree", options=["Yes", "No"]),
            CheckboxField(id="fruit", label="Fruit", options=["Apple", "Pear"], default_value=["Apple", " ", "Pear"]),
            DateField(id="when", label="When", default_value="2024-06-15"),
        ],
    )


class TestDefaultValues:
    """Tests for generate_page_default_values and helpers."""

    def test_multi_select_default_split(self):
        """Test that a multi-select default is split into a trimmed list."""
        page = FormPage(
            id="p1",
            fields=[SelectField(id="tags", label="Tags", options=["x", "y"], multiple=True, default_value="x, y")],
        )
        assert generate_page_default_values(page) == {"tags": ["x", "y"]}

    def test_page_defaults(self):
        """Test initial values for every kind on a page."""
        assert generate_page_default_values(make_page()) == {
            "name": "Jane",
            "email": "",
            "age": 42.0,
            "size": "M",
            "tags": ["x", "y"],
            "agree": "",
            "fruit": ["Apple", "Pear"],
            "when": "2024-06-15",
        }

    def test_number_without_default_is_omitted(self):
        """Test that no default is distinct from zero."""
        assert generate_field_default_value(NumberField(id="n", label="N")) is NO_DEFAULT
        assert generate_field_default_value(NumberField(id="n", label="N", default_value="abc")) is NO_DEFAULT
        assert generate_field_default_value(NumberField(id="n", label="N", default_value="0")) == 0.0
        assert "score" not in generate_page_default_values(make_page())

    def test_number_default_parsed_leniently(self):
        """Test that number defaults use their leading numeric prefix."""
        assert generate_field_default_value(NumberField(id="n", label="N", default_value="12.5kg")) == 12.5

    def test_checkbox_without_default(self):
        """Test that a checkbox with no default starts empty."""
        assert generate_field_default_value(CheckboxField(id="c", label="C", options=["A"])) == []

    def test_display_and_bare_fields(self):
        """Test non-fillable fields start as an empty string."""
        page = FormPage(id="p", fields=[RichTextFormField(id="r", content="<p>x</p>"), FormField(id="b")])
        assert generate_page_default_values(page) == {"r": "", "b": ""}

    def test_derivation_is_deterministic(self):
        """Test that the same page always yields the same map."""
        page = make_page()
        first = generate_page_default_values(page)
        second = generate_page_default_values(page)
        assert first == second
        assert first is not second
        first["fruit"].append("Banana")
        assert generate_page_default_values(page)["fruit"] == ["Apple", "Pear"]

    def test_form_defaults(self):
        """Test per-page maps for a whole form."""
        schema = FormSchema(pages=[make_page(), FormPage(id="p2", fields=[EmailField(id="e", label="E")])])
        defaults = generate_form_default_values(schema)
        assert list(defaults) == ["p1", "p2"]
        assert defaults["p2"] == {"e": ""}

    def test_no_default_is_falsy(self):
        """Test the marker's representation."""
        assert not NO_DEFAULT
        assert repr(NO_DEFAULT) == "NO_DEFAULT"


class TestTransform:
    """Tests for transform_form_data_for_submission."""

    def test_empty_number_becomes_none(self):
        """Test that an empty number answer is submitted as null."""
        fields = [NumberField(id="numberField", label="N")]
        assert transform_form_data_for_submission(fields, {"numberField": ""}) == {"numberField": None}

    def test_coercions(self):
        """Test per-kind coercion of malformed answers."""
        page = make_page()
        data = {
            "name": None,
            "age": 7,
            "size": "",
            "tags": "x",
            "fruit": "Apple",
            "when": "2024-01-01",
        }
        assert transform_form_data_for_submission(page.fields, data) == {
            "name": "",
            "age": 7,
            "size": "",
            "tags": [],
            "fruit": [],
            "when": "2024-01-01",
        }

    def test_lists_kept(self):
        """Test that list answers for list kinds are kept."""
        page = make_page()
        data = {"tags": ["x"], "fruit": ["Apple", "Pear"]}
        assert transform_form_data_for_submission(page.fields, data) == data

    def test_unknown_keys_pass_through(self):
        """Test that answers with no matching field are unchanged."""
        data = {"ghost": "", "other": [1, 2]}
        assert transform_form_data_for_submission([], data) == data

    def test_single_select_not_listified(self):
        """Test that a single select keeps its scalar answer."""
        field = SelectField(id="s", label="S", options=["a"])
        assert transform_field_value(field, "a") == "a"
        assert transform_field_value(field, 0) == ""

    def test_transform_is_idempotent(self):
        """Test that transforming twice equals transforming once."""
        page = make_page()
        data = {"name": "", "age": "", "tags": "x", "fruit": None, "agree": "Yes", "ghost": 1, "score": 3}
        once = transform_form_data_for_submission(page.fields, data)
        twice = transform_form_data_for_submission(page.fields, once)
        assert once == twice

    def test_input_not_mutated(self):
        """Test that the transform returns a new mapping."""
        data = {"age": ""}
        transform_form_data_for_submission([NumberField(id="age", label="Age")], data)
        assert data == {"age": ""}
