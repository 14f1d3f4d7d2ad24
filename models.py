"""
Typed form descriptors.

A form descriptor arrives as JSON:
  {id, title, description?, fields: [...], theme?: {primaryColor, secondaryColor, accentColor}}

Each field dict is dispatched on its "type" into one dataclass per recognised kind.
Option-bearing kinds (rating/select/radio/checkbox) share ChoiceField and must carry a
non-empty options list. Unknown types become UnsupportedField, which renders nothing.
Every parsed form and field keeps the dict it came from, so export returns it unchanged.
"""

from __future__ import annotations

import copy
import re
from dataclasses import dataclass, field as dc_field
from typing import Any, ClassVar, Dict, List, Optional, Type

from errors import ValidationError

FIELD_ID_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_-]*$")
# Keys the feedback store writes into every record.
RESERVED_FIELD_IDS = {"timestamp"}
# Characters that would let a colour escape its CSS declaration.
_CSS_UNSAFE_RE = re.compile(r"[;{}<>]")

DEFAULT_PRIMARY_COLOR = "#1a73e8"
DEFAULT_SECONDARY_COLOR = "#f1f3f4"
DEFAULT_ACCENT_COLOR = "#202124"


# ---------------- Fields ----------------


@dataclass
class Field:
    id: str
    label: str
    required: bool = False
    placeholder: Optional[str] = None
    # The dict this field was parsed from; exported as-is when present.
    raw: Dict[str, Any] = dc_field(default_factory=dict, repr=False, compare=False)

    type: ClassVar[str] = ""
    multi_valued: ClassVar[bool] = False

    def to_dict(self) -> Dict[str, Any]:
        if self.raw:
            return copy.deepcopy(self.raw)
        return self._normalized()

    def _normalized(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "type": self.type,
            "id": self.id,
            "label": self.label,
            "required": self.required,
        }
        if self.placeholder is not None:
            out["placeholder"] = self.placeholder
        return out


@dataclass
class TextField(Field):
    type: ClassVar[str] = "text"


@dataclass
class EmailField(Field):
    type: ClassVar[str] = "email"


@dataclass
class TextAreaField(Field):
    type: ClassVar[str] = "textarea"


@dataclass
class ChoiceField(Field):
    options: List[str] = dc_field(default_factory=list)

    def _normalized(self) -> Dict[str, Any]:
        out = super()._normalized()
        out["options"] = list(self.options)
        return out


@dataclass
class RatingField(ChoiceField):
    type: ClassVar[str] = "rating"


@dataclass
class SelectField(ChoiceField):
    type: ClassVar[str] = "select"


@dataclass
class RadioField(ChoiceField):
    type: ClassVar[str] = "radio"


@dataclass
class CheckboxField(ChoiceField):
    type: ClassVar[str] = "checkbox"
    multi_valued: ClassVar[bool] = True


@dataclass
class UnsupportedField(Field):
    """A field whose type this app does not know; skipped when rendering."""

    @property
    def type(self) -> str:  # type: ignore[override]
        return str(self.raw.get("type", ""))


FIELD_TYPES: Dict[str, Type[Field]] = {
    cls.type: cls
    for cls in (TextField, EmailField, TextAreaField, RatingField, SelectField, RadioField, CheckboxField)
}


def _coerce_options(field_id: str, ftype: str, opts: Any) -> List[str]:
    if not isinstance(opts, list) or not opts:
        raise ValidationError(f"Field '{field_id}' of type '{ftype}' needs a non-empty 'options' list")
    return [str(o) for o in opts]


def parse_field(raw: Any) -> Field:
    """Turn one field dict into its typed variant."""
    if not isinstance(raw, dict):
        raise ValidationError(f"Field entries must be objects, got {type(raw).__name__}")

    field_id = raw.get("id")
    if not isinstance(field_id, str) or not FIELD_ID_RE.match(field_id):
        raise ValidationError(f"Invalid field id: {field_id!r}")
    if field_id in RESERVED_FIELD_IDS:
        raise ValidationError(f"Field id '{field_id}' is reserved")

    ftype = str(raw.get("type") or "")
    label = str(raw.get("label") or "")
    required = bool(raw.get("required", False))
    placeholder = raw.get("placeholder")
    if placeholder is not None:
        placeholder = str(placeholder)

    cls = FIELD_TYPES.get(ftype)
    if cls is None:
        return UnsupportedField(id=field_id, label=label, required=required, placeholder=placeholder, raw=copy.deepcopy(raw))
    if issubclass(cls, ChoiceField):
        options = _coerce_options(field_id, ftype, raw.get("options"))
        return cls(
            id=field_id, label=label, required=required, placeholder=placeholder, options=options, raw=copy.deepcopy(raw)
        )
    return cls(id=field_id, label=label, required=required, placeholder=placeholder, raw=copy.deepcopy(raw))


# ---------------- Theme ----------------


def is_safe_css_value(value: Any) -> bool:
    return isinstance(value, str) and not _CSS_UNSAFE_RE.search(value)


def _css_colour(value: Any) -> Optional[str]:
    if not value:
        return None
    if not is_safe_css_value(value):
        raise ValidationError(f"Invalid theme colour: {value!r}")
    return value


def _or_default(value: Optional[str], default: str) -> str:
    return value if value and is_safe_css_value(value) else default


@dataclass
class Theme:
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    accent_color: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Any) -> "Theme":
        if not isinstance(raw, dict):
            return cls()
        return cls(
            primary_color=_css_colour(raw.get("primaryColor")),
            secondary_color=_css_colour(raw.get("secondaryColor")),
            accent_color=_css_colour(raw.get("accentColor")),
        )

    def to_dict(self) -> Dict[str, str]:
        out: Dict[str, str] = {}
        if self.primary_color:
            out["primaryColor"] = self.primary_color
        if self.secondary_color:
            out["secondaryColor"] = self.secondary_color
        if self.accent_color:
            out["accentColor"] = self.accent_color
        return out

    def resolved(self) -> Dict[str, str]:
        """CSS variable name -> colour, with defaults for missing channels."""
        return {
            "--primary-color": _or_default(self.primary_color, DEFAULT_PRIMARY_COLOR),
            "--secondary-color": _or_default(self.secondary_color, DEFAULT_SECONDARY_COLOR),
            "--accent-color": _or_default(self.accent_color, DEFAULT_ACCENT_COLOR),
        }


# ---------------- Forms ----------------


@dataclass
class FormDescriptor:
    id: str
    title: str
    fields: List[Field] = dc_field(default_factory=list)
    description: Optional[str] = None
    theme: Optional[Theme] = None
    raw: Dict[str, Any] = dc_field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(cls, raw: Any) -> "FormDescriptor":
        if not isinstance(raw, dict):
            raise ValidationError("Form must be a JSON object")
        form_id = raw.get("id")
        title = raw.get("title")
        fields = raw.get("fields")
        if not isinstance(form_id, str) or not form_id.strip():
            raise ValidationError("Form is missing a non-empty 'id'")
        if not isinstance(title, str) or not title.strip():
            raise ValidationError("Form is missing a non-empty 'title'")
        if not isinstance(fields, list):
            raise ValidationError("Form 'fields' must be an array")

        parsed = [parse_field(f) for f in fields]
        seen = set()
        for f in parsed:
            if f.id in seen:
                raise ValidationError(f"Duplicate field id '{f.id}' in form '{form_id}'")
            seen.add(f.id)

        description = raw.get("description")
        theme = Theme.from_dict(raw["theme"]) if isinstance(raw.get("theme"), dict) else None
        return cls(
            id=form_id,
            title=title,
            fields=parsed,
            description=str(description) if description is not None else None,
            theme=theme,
            raw=copy.deepcopy(raw),
        )

    def to_dict(self) -> Dict[str, Any]:
        """The imported dict unchanged when there is one, else a normalised rendering."""
        if self.raw:
            return copy.deepcopy(self.raw)
        out: Dict[str, Any] = {"id": self.id, "title": self.title}
        if self.description is not None:
            out["description"] = self.description
        out["fields"] = [f.to_dict() for f in self.fields]
        if self.theme is not None:
            out["theme"] = self.theme.to_dict()
        return out


@dataclass
class RegistryEntry:
    id: str
    name: str
    is_imported: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "isImported": self.is_imported}


# Last-resort form when neither the requested nor the default descriptor can be fetched.
FALLBACK_FORM: Dict[str, Any] = {
    "id": "default",
    "title": "Feedback",
    "description": "Standard feedback form",
    "fields": [
        {
            "type": "text",
            "id": "name",
            "label": "What is your name?",
            "required": True,
            "placeholder": "Enter your name",
        },
        {
            "type": "textarea",
            "id": "message",
            "label": "Your feedback",
            "required": True,
            "placeholder": "Tell us more...",
        },
    ],
    "theme": {
        "primaryColor": DEFAULT_PRIMARY_COLOR,
        "secondaryColor": DEFAULT_SECONDARY_COLOR,
        "accentColor": DEFAULT_ACCENT_COLOR,
    },
}
