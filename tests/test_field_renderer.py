from __future__ import annotations

import pytest

from field_renderer import render, render_fields
from models import UnsupportedField, parse_field


def test_every_known_type_includes_id_and_label(sample_form):
    for field in sample_form.fields:
        html = render(field)
        assert field.id in html
        assert field.label in html


def test_unknown_type_renders_nothing():
    field = parse_field({"type": "slider", "id": "level", "label": "Level"})
    assert isinstance(field, UnsupportedField)
    assert render(field) == ""


def test_required_marker_and_attribute():
    html = render(parse_field({"type": "text", "id": "name", "label": "Name", "required": True}))
    assert "<h3>Name *</h3>" in html
    assert " required" in html

    html = render(parse_field({"type": "text", "id": "name", "label": "Name"}))
    assert "<h3>Name</h3>" in html
    assert "required" not in html


def test_checkbox_group_has_no_required_marker():
    html = render(
        parse_field({"type": "checkbox", "id": "f", "label": "Features", "required": True, "options": ["A", "B"]})
    )
    assert "<h3>Features</h3>" in html
    assert html.count('type="checkbox"') == 2


@pytest.mark.parametrize("ftype,prompt", [("rating", "Choose a rating"), ("select", "Choose an option")])
def test_dropdowns_start_with_an_empty_prompt(ftype, prompt):
    html = render(parse_field({"type": ftype, "id": "x", "label": "X", "options": ["a", "b"]}))
    assert f'<option value="">{prompt}</option>' in html
    assert '<option value="a">a</option><option value="b">b</option>' in html


def test_email_and_textarea_markup():
    assert 'type="email"' in render(parse_field({"type": "email", "id": "e", "label": "E"}))
    assert 'rows="4"' in render(parse_field({"type": "textarea", "id": "m", "label": "M"}))


def test_radio_group_renders_one_input_per_option():
    html = render(parse_field({"type": "radio", "id": "r", "label": "R", "options": ["Yes", "No"]}))
    assert html.count('type="radio"') == 2
    assert 'value="Yes"' in html


def test_values_are_escaped():
    html = render(parse_field({"type": "text", "id": "n", "label": "<b>x</b>", "placeholder": '"quoted"'}))
    assert "<b>" not in html
    assert "&lt;b&gt;x&lt;/b&gt;" in html
    assert "&quot;quoted&quot;" in html


def test_render_fields_keeps_order(sample_form):
    html = render_fields(sample_form.fields)
    positions = [html.index(f'"{f.id}"') for f in sample_form.fields]
    assert positions == sorted(positions)
