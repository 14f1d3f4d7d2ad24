"""
Form descriptor loading with a three-step fallback.

  1. <base>/custom-forms/<form_id>-form.json
  2. <base>/custom-forms/default-form.json
  3. the built-in FALLBACK_FORM (cannot fail)

<base> is either an http(s) URL (fetched with httpx) or a local directory.
Each failed step is logged and the next one is tried; there are no retries.
"""

from __future__ import annotations

import json
import logging
import os
import re
from typing import Any, Optional

import httpx

from errors import FetchError, ValidationError
from models import FALLBACK_FORM, FormDescriptor

logger = logging.getLogger(__name__)

FORMS_SUBDIR = "custom-forms"
DEFAULT_FORM_ID = "default"

_FORM_ID_RE = re.compile(r"^[A-Za-z0-9_-]+$")


def _is_url(base: str) -> bool:
    return base.startswith("http://") or base.startswith("https://")


class FormLoader:
    """Fetch form descriptors by id; see the module docstring for the fallback order."""

    def __init__(self, base: str, client: Optional[httpx.Client] = None, timeout: Optional[float] = None) -> None:
        self.base = base
        self.timeout = timeout
        self._client = client

    # ---------------- Sources ----------------

    def location(self, form_id: str) -> str:
        name = f"{form_id}-form.json"
        if _is_url(self.base):
            return f"{self.base.rstrip('/')}/{FORMS_SUBDIR}/{name}"
        return os.path.join(self.base, FORMS_SUBDIR, name)

    def _http(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(timeout=self.timeout)
        return self._client

    def _fetch_url(self, url: str, require_json_type: bool) -> Any:
        try:
            r = self._http().get(url)
        except httpx.HTTPError as e:
            raise FetchError(f"Request to {url} failed: {e}") from e
        if not r.is_success:
            raise FetchError(f"HTTP error! status: {r.status_code}")
        if require_json_type:
            ctype = r.headers.get("content-type", "")
            if "application/json" not in ctype:
                logger.error("Response from %s is not JSON: %.200s", url, r.text)
                raise FetchError("Response is not valid JSON")
        try:
            return r.json()
        except ValueError as e:
            raise FetchError(f"Response from {url} is not valid JSON: {e}") from e

    def _fetch_file(self, path: str) -> Any:
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except FileNotFoundError as e:
            raise FetchError(f"Missing file: {path}") from e
        except (OSError, ValueError) as e:
            raise FetchError(f"Failed to read {path}: {e}") from e

    def fetch(self, form_id: str, require_json_type: bool = True) -> FormDescriptor:
        """Fetch and parse one descriptor. Raises FetchError on any failure."""
        if not _FORM_ID_RE.match(form_id or ""):
            raise FetchError(f"Invalid form id: {form_id!r}")
        loc = self.location(form_id)
        if _is_url(self.base):
            raw = self._fetch_url(loc, require_json_type)
        else:
            raw = self._fetch_file(loc)
        try:
            return FormDescriptor.from_dict(raw)
        except ValidationError as e:
            raise FetchError(f"{loc} is not a valid form: {e}") from e

    # ---------------- Public API ----------------

    def load(self, form_id: str) -> FormDescriptor:
        try:
            form = self.fetch(form_id)
        except FetchError as e:
            logger.warning("Could not load form '%s': %s", form_id, e)
            form = self.load_default()
        return form

    def load_default(self) -> FormDescriptor:
        try:
            # The default tier only checks status and body, not the content type.
            form = self.fetch(DEFAULT_FORM_ID, require_json_type=False)
        except FetchError as e:
            logger.error("Could not load the default form, using the built-in one: %s", e)
            form = builtin_form()
        return form

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None


def builtin_form() -> FormDescriptor:
    return FormDescriptor.from_dict(FALLBACK_FORM)