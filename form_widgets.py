"""
Streamlit widgets for a mounted form.

Exports:
- render_form(controller, lang=None, show_required_errors=False) -> None

Widget values land in st.session_state under controller.widget_key(...), which is where
FormController reads them back for validation and extraction.
"""

from __future__ import annotations

from typing import Dict, Optional

import streamlit as st

from field_renderer import RATING_PROMPT, SELECT_PROMPT
from form_controller import FormController
from models import CheckboxField, Field, RadioField, RatingField, SelectField, UnsupportedField


def _label(field: Field) -> str:
    # Visual indicator only; requiredness is enforced by FormController.validate()
    if field.required and not isinstance(field, CheckboxField):
        return f"{field.label} *"
    return field.label


def render_field(controller: FormController, field: Field, lang: Optional[Dict[str, str]] = None) -> None:
    lang = lang or {}
    key = controller.widget_key(field)
    label = _label(field)

    if field.type in ("text", "email"):
        st.text_input(label, placeholder=field.placeholder or "", key=key)

    elif field.type == "textarea":
        st.text_area(label, placeholder=field.placeholder or "", height=120, key=key)

    elif isinstance(field, (RatingField, SelectField)):
        prompt = (
            lang.get("prompt.rating", RATING_PROMPT)
            if isinstance(field, RatingField)
            else lang.get("prompt.select", SELECT_PROMPT)
        )
        st.selectbox(label, options=field.options, index=None, placeholder=prompt, key=key)

    elif isinstance(field, RadioField):
        st.radio(label, options=field.options, index=None, key=key)

    elif isinstance(field, CheckboxField):
        st.markdown(f"**{label}**")
        for i, opt in enumerate(field.options):
            st.checkbox(opt, key=controller.widget_key(field, i))


def render_form(
    controller: FormController,
    lang: Optional[Dict[str, str]] = None,
    show_required_errors: bool = False,
) -> None:
    """Render every supported field of the mounted form, in descriptor order."""
    if controller.form is None:
        return
    for field in controller.form.fields:
        if isinstance(field, UnsupportedField):
            continue
        render_field(controller, field, lang)
        if show_required_errors and controller.invalid_field == field.id:
            msg = controller.last_error or "This field is required."
            st.caption(f":red[{msg}]")
