"""Per-session service wiring shared by the main page and pages/."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict

import streamlit as st

from feedback_store import FeedbackStore
from form_controller import FormController
from form_loader import FormLoader
from form_registry import FormRegistry
from settings import Settings, load_lang, load_settings
from storage import LocalStorage

logger = logging.getLogger(__name__)

SERVICES_KEY = "_services"


@dataclass
class Services:
    settings: Settings
    lang: Dict[str, str]
    registry: FormRegistry
    store: FeedbackStore
    controller: FormController


def build_services(settings: Settings) -> Services:
    loader = FormLoader(settings.forms_base, timeout=settings.fetch_timeout)
    try:
        default_form = loader.load(settings.default_form_id)
    finally:
        loader.close()
    registry = FormRegistry([default_form])
    store = FeedbackStore(LocalStorage(settings.storage_dir), key=settings.storage_key)
    logger.info("Session started with form '%s' and %d stored record(s)", default_form.id, len(store.records))
    return Services(
        settings=settings,
        lang=load_lang(settings.locale),
        registry=registry,
        store=store,
        controller=FormController(),
    )


def get_services() -> Services:
    if SERVICES_KEY not in st.session_state:
        st.session_state[SERVICES_KEY] = build_services(load_settings())
    return st.session_state[SERVICES_KEY]
