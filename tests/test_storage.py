from __future__ import annotations

import pytest

from errors import StorageError
from storage import LocalStorage


def test_set_get_remove(tmp_path):
    s = LocalStorage(str(tmp_path / "slots"))
    assert s.get_item("feedbacks", []) == []
    s.set_item("feedbacks", [{"a": 1}])
    assert s.get_item("feedbacks") == [{"a": 1}]
    s.remove_item("feedbacks")
    s.remove_item("feedbacks")
    assert s.get_item("feedbacks") is None


def test_unparsable_slot_reads_as_default(tmp_path):
    (tmp_path / "feedbacks.json").write_text("{broken", encoding="utf-8")
    assert LocalStorage(str(tmp_path)).get_item("feedbacks", []) == []


def test_bad_key_is_rejected(tmp_path):
    with pytest.raises(StorageError):
        LocalStorage(str(tmp_path)).get_item("../escape")


def test_unserialisable_value_raises_storage_error(tmp_path):
    s = LocalStorage(str(tmp_path))
    with pytest.raises(StorageError):
        s.set_item("k", {"bad": object()})


def test_non_utf8_slot_reads_as_default(tmp_path):
    from feedback_store import FeedbackStore

    (tmp_path / "feedbacks.json").write_bytes(b"\xff\xfe[garbage")
    storage = LocalStorage(str(tmp_path))
    assert storage.get_item("feedbacks", []) == []
    assert FeedbackStore(storage).records == []
