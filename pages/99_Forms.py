"""
Form management page.

- Lists built-in and imported forms from the session registry
- Downloads any form as JSON
- Removes imported forms
"""
from __future__ import annotations

import pandas as pd
import streamlit as st

from app.state import get_services
from app.ui import render_status, show_status, wide_button
from errors import FormsError

st.set_page_config(page_title="Forms", layout="centered")

svc = get_services()
lang = svc.lang
registry = svc.registry

st.title(f"🗂️ {lang.get('forms.title', 'Forms')}")
render_status(svc.settings.status_ttl)

entries = registry.list()
st.dataframe(
    pd.DataFrame([e.to_dict() for e in entries], columns=["id", "name", "isImported"]),
    hide_index=True,
)

summaries = registry.imported_summaries()
st.subheader(lang.get("forms.imported", "Imported forms"))
if not summaries:
    st.info(lang.get("forms.none_imported", "No imported forms yet. Use the import box on the main page."))
else:
    st.dataframe(pd.DataFrame(summaries, columns=["id", "title", "fieldsCount"]), hide_index=True)

st.markdown("---")

form_id = st.selectbox(
    lang.get("forms.pick", "Form"),
    options=[e.id for e in entries],
    format_func=lambda k: next((e.name for e in entries if e.id == k), k),
    key="forms_page_sel",
)

if form_id:
    try:
        payload = registry.export_json(form_id)
    except FormsError as e:
        st.error(f"{lang.get('status.export_failed', 'Export failed')}: {e}")
    else:
        st.download_button(
            lang.get("sidebar.export_form", "Download form JSON"),
            data=payload.encode("utf-8"),
            file_name=f"{form_id}-form.json",
            mime="application/json",
        )
        with st.expander(lang.get("forms.preview", "JSON")):
            st.code(payload, language="json")

    imported_ids = {s["id"] for s in summaries}
    if form_id in imported_ids and wide_button(lang.get("forms.remove", "Remove imported form"), key="remove_form"):
        registry.remove(form_id)
        show_status(st.session_state, lang.get("status.removed", "Form removed."))
        st.rerun()
