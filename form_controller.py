"""
Form controller: markup, theme, validation, and value extraction for one mounted form.

The controller never talks to Streamlit directly. It reads widget values out of a
mutable mapping (st.session_state in the app, a plain dict in tests) using the keys
from widget_key().
"""

from __future__ import annotations

import re
from typing import Any, Dict, Iterator, List, MutableMapping, Optional, Tuple, Union

from field_renderer import render_fields
from models import CheckboxField, Field, FormDescriptor, RadioField, Theme, UnsupportedField

SUBMIT_LABEL = "Save feedback"
REQUIRED_MESSAGE = "Please fill in all required fields"
EMAIL_MESSAGE = "Please enter a valid email address"

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+$")

Value = Union[str, List[str]]


def _text(v: Any) -> str:
    return "" if v is None else str(v)


class FormController:
    def __init__(self) -> None:
        self.form: Optional[FormDescriptor] = None
        self.state: MutableMapping[str, Any] = {}
        self.theme_vars: Dict[str, str] = Theme().resolved()
        self.invalid_field: Optional[str] = None
        self.last_error: Optional[str] = None

    # ---------------- Mounting ----------------

    def mount(self, form: FormDescriptor, state: MutableMapping[str, Any]) -> None:
        """Bind to form and its live widget state. Remounting the same form keeps the last validation result."""
        if self.form is None or self.form.id != form.id:
            self.invalid_field = None
            self.last_error = None
        self.form = form
        self.state = state

    def widget_key(self, field: Field, index: Optional[int] = None) -> str:
        form_id = self.form.id if self.form else "form"
        key = f"{form_id}__{field.id}"
        return key if index is None else f"{key}__{index}"

    def _fields(self) -> List[Field]:
        if self.form is None:
            return []
        return [f for f in self.form.fields if not isinstance(f, UnsupportedField)]

    # ---------------- Markup & theme ----------------

    def build_markup(self, form: FormDescriptor) -> str:
        return (
            '<form id="dynamicForm" class="dynamic-form">'
            + render_fields(form.fields)
            + '<button type="submit" id="submitBtn" class="submit-btn">'
            + f'<span class="btn-text">{SUBMIT_LABEL}</span></button></form>'
        )

    def apply_theme(self, theme: Optional[Theme]) -> Dict[str, str]:
        """Set the CSS variables for theme; missing channels take the defaults."""
        self.theme_vars = (theme or Theme()).resolved()
        return self.theme_vars

    def theme_css(self) -> str:
        decls = " ".join(f"{k}: {v};" for k, v in self.theme_vars.items())
        return f"<style>:root {{ {decls} }}</style>"

    # ---------------- Values ----------------

    def form_entries(self) -> Iterator[Tuple[str, str]]:
        """(name, value) pairs in field order, shaped like browser FormData."""
        for f in self._fields():
            if isinstance(f, CheckboxField):
                for i, opt in enumerate(f.options):
                    if self.state.get(self.widget_key(f, i)):
                        yield f.id, opt
            elif isinstance(f, RadioField):
                v = self.state.get(self.widget_key(f))
                if v is not None and v != "":
                    yield f.id, _text(v)
            else:
                yield f.id, _text(self.state.get(self.widget_key(f)))

    def extract_values(self) -> Dict[str, Value]:
        data: Dict[str, Value] = {}
        for f in self._fields():
            if f.multi_valued:
                data[f.id] = []
        for key, value in self.form_entries():
            if key not in data:
                data[key] = value
                continue
            prev = data[key]
            if isinstance(prev, list):
                prev.append(value)
            else:
                data[key] = [prev, value]
        return data

    def _is_blank(self, field: Field) -> bool:
        if isinstance(field, CheckboxField):
            return not any(self.state.get(self.widget_key(field, i)) for i in range(len(field.options)))
        return _text(self.state.get(self.widget_key(field))).strip() == ""

    def validate(self) -> bool:
        """
        True when every required field is non-blank and emails look like addresses.
        On failure, invalid_field names the first offending field and last_error says why.
        """
        self.invalid_field = None
        self.last_error = None
        for f in self._fields():
            if f.required and self._is_blank(f):
                self.invalid_field = f.id
                self.last_error = REQUIRED_MESSAGE
                return False
            if f.type == "email":
                v = _text(self.state.get(self.widget_key(f))).strip()
                if v and not _EMAIL_RE.match(v):
                    self.invalid_field = f.id
                    self.last_error = EMAIL_MESSAGE
                    return False
        return True

    def reset(self) -> None:
        if self.form is None:
            return
        for f in self._fields():
            if isinstance(f, CheckboxField):
                for i in range(len(f.options)):
                    self.state.pop(self.widget_key(f, i), None)
            else:
                self.state.pop(self.widget_key(f), None)
        self.invalid_field = None
        self.last_error = None
