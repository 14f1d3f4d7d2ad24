import logging
from typing import Any

import streamlit as st

from app.actions import clear_feedback, import_form, submit_feedback
from app.state import Services, get_services
from app.ui import render_status, show_status, wide_button
from errors import FormsError
from feedback_store import EXPORT_FILENAME, summarize
from form_widgets import render_form
from models import FormDescriptor, Theme

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# ---------------- App Config ----------------

st.set_page_config(page_title="Feedback", layout="centered", initial_sidebar_state="expanded")

svc: Services = get_services()
lang = svc.lang
settings = svc.settings
registry = svc.registry
store = svc.store
controller = svc.controller

st.title(f"📝 {lang.get('app.title', 'Feedback')}")


# ---------------- Event handlers ----------------
# These run as widget callbacks, before the script reruns, so they may clear widget state.


def _handle_submit() -> None:
    submit_feedback(controller, store, st.session_state, lang)


def _handle_import() -> None:
    uploaded: Any = st.session_state.get("import_file")
    if uploaded is None:
        return
    form = import_form(registry, uploaded.getvalue(), st.session_state, lang)
    if form is not None:
        st.session_state["form_sel"] = form.id


def _handle_clear() -> None:
    if not st.session_state.get("confirm_clear"):
        return
    if clear_feedback(store, st.session_state, lang):
        st.session_state["confirm_clear"] = False


def _handle_exported() -> None:
    show_status(st.session_state, lang.get("status.exported", "Feedback exported to CSV!"))


def _handle_nothing_to_export() -> None:
    show_status(st.session_state, lang.get("status.nothing_to_export", "No feedback to export"), "error")


# ---------------- Sidebar: forms ----------------

entries = {e.id: e for e in registry.list()}
if st.session_state.get("form_sel") not in entries:
    st.session_state["form_sel"] = next(iter(entries))

st.sidebar.subheader(lang.get("sidebar.forms", "Forms"))
form_id = st.sidebar.selectbox(
    lang.get("sidebar.form", "Form"),
    options=list(entries.keys()),
    format_func=lambda k: entries[k].name + (" (imported)" if entries[k].is_imported else ""),
    key="form_sel",
)

st.sidebar.file_uploader(
    lang.get("sidebar.import", "Import form from JSON"),
    type=["json"],
    key="import_file",
    on_change=_handle_import,
)

try:
    form_json = registry.export_json(form_id)
except FormsError as e:
    form_json = None
    st.sidebar.error(f"{lang.get('status.export_failed', 'Export failed')}: {e}")
if form_json is not None:
    st.sidebar.download_button(
        lang.get("sidebar.export_form", "Download form JSON"),
        data=form_json.encode("utf-8"),
        file_name=f"{form_id}-form.json",
        mime="application/json",
        use_container_width=True,
    )

# ---------------- Sidebar: feedback data ----------------

st.sidebar.subheader(lang.get("sidebar.data", "Feedback data"))
csv_text = store.export_delimited()
if csv_text is None:
    with st.sidebar:
        wide_button(lang.get("sidebar.export_csv", "Export to CSV"), key="export_empty", on_click=_handle_nothing_to_export)
else:
    st.sidebar.download_button(
        lang.get("sidebar.export_csv", "Export to CSV"),
        data=csv_text.encode("utf-8"),
        file_name=EXPORT_FILENAME,
        mime="text/csv",
        on_click=_handle_exported,
        use_container_width=True,
    )

st.sidebar.checkbox(lang.get("sidebar.confirm_clear", "I want to delete ALL feedback"), key="confirm_clear")
st.sidebar.button(
    lang.get("sidebar.clear", "Delete all feedback"),
    type="primary",
    disabled=not st.session_state.get("confirm_clear"),
    on_click=_handle_clear,
    use_container_width=True,
)

# ---------------- Form ----------------

render_status(settings.status_ttl)

form: FormDescriptor = registry.get(form_id)
controller.mount(form, st.session_state)
controller.apply_theme(form.theme or Theme.from_dict(settings.theme))
st.markdown(controller.theme_css(), unsafe_allow_html=True)

st.subheader(form.title)
if form.description:
    st.caption(form.description)

with st.form(key=f"form__{form.id}"):
    render_form(controller, lang, show_required_errors=controller.invalid_field is not None)
    st.form_submit_button(lang.get("form.submit", "Save feedback"), on_click=_handle_submit)

with st.expander(lang.get("form.markup", "Form markup")):
    st.code(controller.build_markup(form), language="html")

# ---------------- Recent feedback ----------------

st.subheader(lang.get("section.recent", "Recent feedback"))
recent = store.list_recent(settings.recent_limit)
if not recent:
    st.write(lang.get("recent.empty", "No feedback yet"))
for record in recent:
    view = summarize(record)
    with st.container(border=True):
        st.markdown(f"**{view['name']}**")
        if view["message"]:
            st.markdown(f"**{lang.get('recent.message', 'Feedback')}:** {view['message']}")
        st.caption(view["date"])
