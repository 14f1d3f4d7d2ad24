from __future__ import annotations

import json

from app.state import build_services
from form_loader import FormLoader
from settings import Settings


def test_build_services_loads_default_form_and_closes_loader(tmp_path, forms_dir, sample_dict, monkeypatch):
    sample_dict["id"] = "default"
    (forms_dir / "default-form.json").write_text(json.dumps(sample_dict), encoding="utf-8")
    closed = []
    monkeypatch.setattr(FormLoader, "close", lambda self: closed.append(self.base))

    svc = build_services(Settings(forms_base=str(tmp_path), storage_dir=str(tmp_path / "storage")))

    assert closed == [str(tmp_path)]
    assert svc.registry.get("default").title == "Survey"
    assert [e.id for e in svc.registry.list()] == ["default"]
    assert svc.store.records == []
