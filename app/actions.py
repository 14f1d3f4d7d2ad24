"""
Event pipelines behind the main page's widgets.

Each takes the services it needs plus the session-state mapping, reports the outcome
through show_status(), and never raises a FormsError to the caller.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, MutableMapping, Optional

from app.ui import show_status
from errors import FormsError
from feedback_store import FeedbackStore, Record
from form_controller import FormController
from form_registry import FormRegistry
from models import FormDescriptor

logger = logging.getLogger(__name__)


def submit_feedback(
    controller: FormController,
    store: FeedbackStore,
    state: MutableMapping[str, Any],
    lang: Optional[Dict[str, str]] = None,
) -> Optional[Record]:
    """validate -> extract -> timestamp + append -> reset. Returns the stored record, or None."""
    lang = lang or {}
    if not controller.validate():
        show_status(state, controller.last_error or lang.get("status.required", "Please fill in all required fields"), "error")
        return None
    values = controller.extract_values()
    try:
        record = store.submit(values)
    except FormsError as e:
        logger.warning("Saving feedback failed: %s", e)
        show_status(state, f"{lang.get('status.error', 'Error')}: {e}", "error")
        return None
    controller.reset()
    show_status(state, lang.get("status.saved", "Feedback saved!"))
    return record


def import_form(
    registry: FormRegistry,
    data: bytes,
    state: MutableMapping[str, Any],
    lang: Optional[Dict[str, str]] = None,
) -> Optional[FormDescriptor]:
    lang = lang or {}
    try:
        form = registry.import_bytes(data)
    except FormsError as e:
        show_status(state, f"{lang.get('status.import_failed', 'Form import failed')}: {e}", "error")
        return None
    show_status(state, lang.get("status.imported", "Form imported!"))
    return form


def clear_feedback(
    store: FeedbackStore,
    state: MutableMapping[str, Any],
    lang: Optional[Dict[str, str]] = None,
) -> bool:
    """Delete all records; the caller has already collected the user's confirmation."""
    lang = lang or {}
    try:
        store.clear()
    except FormsError as e:
        show_status(state, f"{lang.get('status.clear_failed', 'Clear failed')}: {e}", "error")
        return False
    show_status(state, lang.get("status.cleared", "All feedback deleted!"))
    return True
