from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from models import is_safe_css_value

logger = logging.getLogger(__name__)

DATA_DIR = os.path.join(os.getcwd(), "data")
SETTINGS_FP = os.path.join(DATA_DIR, "settings.json")
LANG_DIR = os.path.join(os.getcwd(), "lang")


@dataclass
class Settings:
    forms_base: str = DATA_DIR
    storage_dir: str = os.path.join(DATA_DIR, "storage")
    storage_key: str = "feedbacks"
    default_form_id: str = "default"
    recent_limit: int = 10
    status_ttl: float = 5.0
    fetch_timeout: Optional[float] = None
    locale: str = "en"
    theme: Dict[str, str] = field(default_factory=dict)


# Environment variable -> Settings attribute
ENV_OVERRIDES = {
    "FEEDBACK_FORMS_BASE": "forms_base",
    "FEEDBACK_STORAGE_DIR": "storage_dir",
    "FEEDBACK_FORM_ID": "default_form_id",
    "FEEDBACK_LOCALE": "locale",
}


def _read_json_safe(path: str, default: Any) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        return default
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Could not read %s, using defaults: %s", path, e)
        return default


def load_settings(path: str = SETTINGS_FP, environ: Optional[Dict[str, str]] = None) -> Settings:
    """
    Build Settings from data/settings.json, then environment overrides.
    Unknown keys in the file are ignored; a broken file means plain defaults.
    """
    env = os.environ if environ is None else environ
    raw = _read_json_safe(path, {})
    if not isinstance(raw, dict):
        logger.warning("%s is not a JSON object, ignoring it", path)
        raw = {}

    s = Settings()
    for key in ("forms_base", "storage_dir", "storage_key", "default_form_id", "locale"):
        if isinstance(raw.get(key), str) and raw[key].strip():
            setattr(s, key, raw[key].strip())
    if isinstance(raw.get("recent_limit"), int) and raw["recent_limit"] > 0:
        s.recent_limit = raw["recent_limit"]
    if isinstance(raw.get("status_ttl"), (int, float)):
        s.status_ttl = float(raw["status_ttl"])
    if isinstance(raw.get("fetch_timeout"), (int, float)):
        s.fetch_timeout = float(raw["fetch_timeout"])
    if isinstance(raw.get("theme"), dict):
        s.theme = {k: v for k, v in raw["theme"].items() if is_safe_css_value(v)}

    for var, attr in ENV_OVERRIDES.items():
        val = (env.get(var) or "").strip()
        if val:
            setattr(s, attr, val)
    return s


def load_lang(locale: str = "en", lang_dir: str = LANG_DIR) -> Dict[str, str]:
    # Only 'en' ships today; an unknown locale falls back to it, then to an empty map.
    data = _read_json_safe(os.path.join(lang_dir, f"{locale}.json"), None)
    if data is None and locale != "en":
        data = _read_json_safe(os.path.join(lang_dir, "en.json"), None)
    return data if isinstance(data, dict) else {}
