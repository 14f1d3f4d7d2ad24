"""
File-backed key-value slots, one JSON file per key under a directory.

There is no locking: two processes doing read-modify-write on the same key can lose an
update. Fine for a single-user local tool.
"""

from __future__ import annotations

import json
import logging
import os
import re
from typing import Any

from errors import StorageError

logger = logging.getLogger(__name__)

_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class LocalStorage:
    def __init__(self, directory: str) -> None:
        self.directory = directory

    def _path(self, key: str) -> str:
        if not _KEY_RE.match(key or ""):
            raise StorageError(f"Invalid storage key: {key!r}")
        return os.path.join(self.directory, f"{key}.json")

    def get_item(self, key: str, default: Any = None) -> Any:
        """Stored value for key, or default when absent or unparsable."""
        path = self._path(key)
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except FileNotFoundError:
            logger.debug("Storage slot %s is empty", key)
            return default
        except ValueError as e:
            # JSONDecodeError and UnicodeDecodeError both land here.
            logger.warning("Storage slot %s is not valid JSON (%s); treating as empty", key, e)
            return default
        except OSError as e:
            raise StorageError(f"Could not read '{key}': {e}") from e

    def set_item(self, key: str, value: Any) -> None:
        path = self._path(key)
        tmp = path + ".tmp"
        try:
            os.makedirs(self.directory, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(value, f, ensure_ascii=False, indent=2)
            os.replace(tmp, path)
        except (OSError, TypeError, ValueError) as e:
            raise StorageError(f"Could not save '{key}': {e}") from e

    def remove_item(self, key: str) -> None:
        path = self._path(key)
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            raise StorageError(f"Could not remove '{key}': {e}") from e
