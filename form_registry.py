"""
Registry of available forms: built-in descriptors plus imported ones.

Imports are last-write-wins per id. Lookups check imported forms before built-ins.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterable, List, Optional

from errors import NotFoundError, ParseError
from models import FormDescriptor, RegistryEntry

logger = logging.getLogger(__name__)

BUILTIN_NAMES = {"default": "Feedback"}


class FormRegistry:
    def __init__(self, builtins: Iterable[FormDescriptor] = ()) -> None:
        self._builtins: Dict[str, FormDescriptor] = {}
        self._builtin_entries: List[RegistryEntry] = []
        for form in builtins:
            self.add_builtin(form)
        self._imported: Dict[str, FormDescriptor] = {}
        self._index: Dict[str, RegistryEntry] = {}

    def add_builtin(self, form: FormDescriptor, name: Optional[str] = None) -> None:
        self._builtins[form.id] = form
        self._builtin_entries = [e for e in self._builtin_entries if e.id != form.id]
        self._builtin_entries.append(
            RegistryEntry(id=form.id, name=name or BUILTIN_NAMES.get(form.id, form.title), is_imported=False)
        )

    # ---------------- Import / export ----------------

    def import_json(self, text: str) -> FormDescriptor:
        """Parse, validate, and register a descriptor. Raises ParseError/ValidationError."""
        try:
            raw = json.loads(text)
        except ValueError as e:
            raise ParseError(str(e)) from e
        form = FormDescriptor.from_dict(raw)
        self._imported[form.id] = form
        self._index[form.id] = RegistryEntry(id=form.id, name=form.title, is_imported=True)
        logger.info("Imported form '%s' with %d field(s)", form.id, len(form.fields))
        return form

    def import_bytes(self, data: bytes) -> FormDescriptor:
        """Import an uploaded file's contents, which must be UTF-8 JSON."""
        try:
            text = data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ParseError(f"File is not UTF-8 text: {e}") from e
        return self.import_json(text)

    def export_json(self, form_id: str) -> str:
        form = self.get(form_id)
        return json.dumps(form.to_dict(), ensure_ascii=False, indent=2)

    # ---------------- Lookup ----------------

    def get(self, form_id: str) -> FormDescriptor:
        form = self._imported.get(form_id) or self._builtins.get(form_id)
        if form is None:
            raise NotFoundError(f"Form not found: {form_id}")
        return form

    def __contains__(self, form_id: Any) -> bool:
        return form_id in self._imported or form_id in self._builtins

    def list(self) -> List[RegistryEntry]:
        return list(self._builtin_entries) + list(self._index.values())

    def imported_summaries(self) -> List[Dict[str, Any]]:
        return [
            {"id": fid, "title": form.title, "fieldsCount": len(form.fields)}
            for fid, form in self._imported.items()
        ]

    def remove(self, form_id: str) -> None:
        self._imported.pop(form_id, None)
        self._index.pop(form_id, None)
