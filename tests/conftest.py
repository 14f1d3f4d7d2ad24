from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import pytest

from models import FormDescriptor


SAMPLE_FORM: Dict[str, Any] = {
    "id": "survey",
    "title": "Survey",
    "description": "A sample form",
    "fields": [
        {"type": "text", "id": "name", "label": "Name", "required": True, "placeholder": "Your name"},
        {"type": "email", "id": "email", "label": "Email", "required": False},
        {"type": "textarea", "id": "message", "label": "Message", "required": True},
        {"type": "rating", "id": "rating", "label": "Rating", "required": True, "options": ["1", "2", "3", "4", "5"]},
        {"type": "select", "id": "plan", "label": "Plan", "required": False, "options": ["Free", "Pro"]},
        {"type": "radio", "id": "recommend", "label": "Recommend?", "required": False, "options": ["Yes", "No"]},
        {"type": "checkbox", "id": "features", "label": "Features", "required": False, "options": ["Forms", "Export", "Import"]},
    ],
    "theme": {"primaryColor": "#ff0000"},
}


@pytest.fixture()
def sample_dict() -> Dict[str, Any]:
    return json.loads(json.dumps(SAMPLE_FORM))


@pytest.fixture()
def sample_form(sample_dict) -> FormDescriptor:
    return FormDescriptor.from_dict(sample_dict)


@pytest.fixture()
def forms_dir(tmp_path: Path) -> Path:
    d = tmp_path / "custom-forms"
    d.mkdir()
    return d
