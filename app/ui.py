import time
from typing import Any, Dict, MutableMapping, Optional

import streamlit as st

STATUS_KEY = "_status"
# Seconds between status-region refreshes.
STATUS_POLL = 1.0


def wide_button(label: str, **kwargs):
    """Render a full-width Streamlit button, safely ignoring any width kwarg.

    - Pops an accidental "width" kwarg to avoid TypeError on st.button
    - Defaults to use_container_width=True so the button spans its container
    """
    kwargs.pop("width", None)
    kwargs.setdefault("use_container_width", True)
    return st.button(label, **kwargs)


def show_status(state: MutableMapping[str, Any], message: str, kind: str = "success", now: Optional[float] = None) -> None:
    """Queue a transient status message; kind is "success", "error" or "info"."""
    state[STATUS_KEY] = {
        "message": message,
        "kind": kind,
        "ts": time.time() if now is None else now,
    }


def current_status(state: MutableMapping[str, Any], ttl: float, now: Optional[float] = None) -> Optional[Dict[str, Any]]:
    """The pending status message, or None once it is older than ttl seconds."""
    status = state.get(STATUS_KEY)
    if not status:
        return None
    t = time.time() if now is None else now
    if t - status.get("ts", 0) > ttl:
        state.pop(STATUS_KEY, None)
        return None
    return status


@st.fragment(run_every=STATUS_POLL)
def render_status(ttl: float) -> None:
    """Show the pending status message. Reruns on its own, so the message clears once ttl passes."""
    status = current_status(st.session_state, ttl)
    if status is None:
        return
    if status["kind"] == "error":
        st.error(status["message"])
    elif status["kind"] == "info":
        st.info(status["message"])
    else:
        st.success(status["message"])
