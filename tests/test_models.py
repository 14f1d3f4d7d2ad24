from __future__ import annotations

import pytest

from errors import ValidationError
from models import (
    CheckboxField,
    FormDescriptor,
    RatingField,
    TextField,
    Theme,
    UnsupportedField,
    parse_field,
)


def test_fields_parse_into_their_variants(sample_form):
    kinds = [type(f).__name__ for f in sample_form.fields]
    assert kinds == [
        "TextField",
        "EmailField",
        "TextAreaField",
        "RatingField",
        "SelectField",
        "RadioField",
        "CheckboxField",
    ]
    assert isinstance(sample_form.fields[3], RatingField)
    assert sample_form.fields[3].options == ["1", "2", "3", "4", "5"]


def test_option_bearing_field_without_options_is_rejected():
    with pytest.raises(ValidationError):
        parse_field({"type": "select", "id": "plan", "label": "Plan"})
    with pytest.raises(ValidationError):
        parse_field({"type": "rating", "id": "r", "label": "R", "options": []})


def test_numeric_options_are_coerced_to_strings():
    f = parse_field({"type": "rating", "id": "r", "label": "R", "options": [1, 2, 3]})
    assert f.options == ["1", "2", "3"]


@pytest.mark.parametrize("bad_id", ["", "1abc", "has space", None, "-x"])
def test_field_ids_must_be_identifiers(bad_id):
    with pytest.raises(ValidationError):
        parse_field({"type": "text", "id": bad_id, "label": "x"})


def test_unknown_type_is_kept_as_unsupported():
    raw = {"type": "slider", "id": "level", "label": "Level", "min": 0}
    f = parse_field(raw)
    assert isinstance(f, UnsupportedField)
    assert f.type == "slider"
    assert f.to_dict() == raw


def test_duplicate_field_ids_are_rejected(sample_dict):
    sample_dict["fields"].append({"type": "text", "id": "name", "label": "Again"})
    with pytest.raises(ValidationError, match="Duplicate"):
        FormDescriptor.from_dict(sample_dict)


@pytest.mark.parametrize(
    "raw",
    [
        {"id": "x"},
        {"id": "x", "title": "T"},
        {"id": "", "title": "T", "fields": []},
        {"id": "x", "title": "", "fields": []},
        {"id": "x", "title": "T", "fields": {}},
        ["not", "an", "object"],
    ],
)
def test_form_requires_id_title_and_fields(raw):
    with pytest.raises(ValidationError):
        FormDescriptor.from_dict(raw)


def test_minimal_form_round_trips_exactly():
    raw = {"id": "x", "title": "T", "fields": []}
    assert FormDescriptor.from_dict(raw).to_dict() == raw


def test_full_form_round_trips(sample_dict, sample_form):
    assert sample_form.to_dict() == sample_dict


def test_theme_defaults_fill_missing_channels():
    assert Theme.from_dict({"accentColor": "#000"}).resolved() == {
        "--primary-color": "#1a73e8",
        "--secondary-color": "#f1f3f4",
        "--accent-color": "#000",
    }
    assert Theme.from_dict(None).resolved()["--primary-color"] == "#1a73e8"


def test_checkbox_is_the_only_multi_valued_kind():
    assert CheckboxField.multi_valued is True
    assert TextField.multi_valued is False


def test_timestamp_is_a_reserved_field_id():
    with pytest.raises(ValidationError):
        parse_field({"type": "text", "id": "timestamp", "label": "T"})


@pytest.mark.parametrize("colour", ["red;}</style><script>", "#fff}", "a{b", "x<y"])
def test_theme_colours_that_break_out_of_css_are_rejected(colour):
    with pytest.raises(ValidationError):
        FormDescriptor.from_dict({"id": "x", "title": "T", "fields": [], "theme": {"primaryColor": colour}})


def test_unsafe_theme_colour_set_directly_resolves_to_default():
    assert Theme(primary_color="x}").resolved()["--primary-color"] == "#1a73e8"
