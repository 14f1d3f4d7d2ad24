from __future__ import annotations

import time

from streamlit.testing.v1 import AppTest

from app.ui import STATUS_KEY, current_status, show_status


def test_status_is_visible_until_ttl_expires():
    state = {}
    show_status(state, "Saved", now=100.0)
    assert current_status(state, ttl=5, now=104.0)["message"] == "Saved"
    assert current_status(state, ttl=5, now=105.5) is None
    assert STATUS_KEY not in state


def test_newer_status_replaces_older():
    state = {}
    show_status(state, "first", now=1.0)
    show_status(state, "second", kind="error", now=2.0)
    status = current_status(state, ttl=5, now=3.0)
    assert status == {"message": "second", "kind": "error", "ts": 2.0}


def test_no_status():
    assert current_status({}, ttl=5) is None


def _status_page():
    from app.ui import render_status

    render_status(5.0)


def test_status_region_shows_fresh_message():
    at = AppTest.from_function(_status_page)
    at.session_state[STATUS_KEY] = {"message": "Saved", "kind": "success", "ts": time.time()}
    at.run()
    assert not at.exception
    assert [s.value for s in at.success] == ["Saved"]


def test_status_region_clears_expired_message():
    at = AppTest.from_function(_status_page)
    at.session_state[STATUS_KEY] = {"message": "Saved", "kind": "success", "ts": time.time()}
    at.run()
    assert len(at.success) == 1

    at.session_state[STATUS_KEY] = {"message": "Saved", "kind": "success", "ts": time.time() - 60}
    at.run()
    assert not at.exception
    assert len(at.success) == 0
    assert len(at.error) == 0


def test_status_region_renders_error_kind():
    at = AppTest.from_function(_status_page)
    at.session_state[STATUS_KEY] = {"message": "Boom", "kind": "error", "ts": time.time()}
    at.run()
    assert [e.value for e in at.error] == ["Boom"]
