"""
HTML markup for form fields.

Exports:
- render(field) -> str
- render_fields(fields) -> str

Pure functions: they build fragments and never touch Streamlit state. Unsupported field
types render as an empty string.
"""

from __future__ import annotations

from html import escape
from typing import Any, Callable, Dict, Iterable

from models import (
    CheckboxField,
    ChoiceField,
    Field,
    RadioField,
    RatingField,
    SelectField,
)

RATING_PROMPT = "Choose a rating"
SELECT_PROMPT = "Choose an option"


def _attr(value: object) -> str:
    return escape(str(value), quote=True)


def _heading(field: Field, mark_required: bool = True) -> str:
    suffix = " *" if (mark_required and field.required) else ""
    return f"<h3>{escape(field.label)}{suffix}</h3>"


def _required(field: Field) -> str:
    return " required" if field.required else ""


def _question(inner: str) -> str:
    return f'<div class="question">{inner}</div>'


def _text_input(field: Field) -> str:
    return _question(
        _heading(field)
        + f'<input type="{field.type}" id="{_attr(field.id)}" name="{_attr(field.id)}"'
        + f'{_required(field)} placeholder="{_attr(field.placeholder or "")}">'
    )


def _text_area(field: Field) -> str:
    return _question(
        _heading(field)
        + f'<textarea id="{_attr(field.id)}" name="{_attr(field.id)}"{_required(field)}'
        + f' placeholder="{_attr(field.placeholder or "")}" rows="4"></textarea>'
    )


def _dropdown(field: ChoiceField, prompt: str) -> str:
    options = "".join(f'<option value="{_attr(o)}">{escape(o)}</option>' for o in field.options)
    return _question(
        _heading(field)
        + f'<select id="{_attr(field.id)}" name="{_attr(field.id)}"{_required(field)}>'
        + f'<option value="">{escape(prompt)}</option>{options}</select>'
    )


def _rating(field: RatingField) -> str:
    return _dropdown(field, RATING_PROMPT)


def _select(field: SelectField) -> str:
    return _dropdown(field, SELECT_PROMPT)


def _radio_group(field: RadioField) -> str:
    items = "".join(
        '<label class="radio-option">'
        f'<input type="radio" name="{_attr(field.id)}" value="{_attr(o)}"{_required(field)}>'
        f'<span class="radio-custom"></span><span>{escape(o)}</span></label>'
        for o in field.options
    )
    return _question(
        _heading(field) + f'<div class="radio-group" id="{_attr(field.id)}">{items}</div>'
    )


def _checkbox_group(field: CheckboxField) -> str:
    items = "".join(
        '<label class="checkbox-option">'
        f'<input type="checkbox" name="{_attr(field.id)}" value="{_attr(o)}">'
        f'<span class="checkbox-custom"></span><span>{escape(o)}</span></label>'
        for o in field.options
    )
    # Checkbox groups never show the required marker.
    return _question(
        _heading(field, mark_required=False)
        + f'<div class="checkbox-group" id="{_attr(field.id)}">{items}</div>'
    )


_RENDERERS: Dict[str, Callable[[Any], str]] = {
    "text": _text_input,
    "email": _text_input,
    "textarea": _text_area,
    "rating": _rating,
    "select": _select,
    "radio": _radio_group,
    "checkbox": _checkbox_group,
}


def render(field: Field) -> str:
    """Markup for a single field, or "" when the type is not recognised."""
    fn = _RENDERERS.get(field.type)
    if fn is None:
        return ""
    return fn(field)


def render_fields(fields: Iterable[Field]) -> str:
    return "".join(render(f) for f in fields)
