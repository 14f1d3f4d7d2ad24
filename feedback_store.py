"""
Persisted feedback records and their CSV export.

Records live as one JSON array in a single storage slot. Appends are read-modify-write
over the whole array, so two writers on the same slot can lose an update.
"""

from __future__ import annotations

import csv
import datetime
import logging
from typing import Any, Dict, List, Mapping, Optional

import pandas as pd

from storage import LocalStorage

logger = logging.getLogger(__name__)

STORAGE_KEY = "feedbacks"
EXPORT_FILENAME = "feedback-export.csv"
CSV_HEADER = ["Date", "Name", "Email", "Message", "Rating", "Features"]
ANONYMOUS = "Anonymous"
PREVIEW_CHARS = 100

Record = Dict[str, Any]


def now_iso() -> str:
    """UTC timestamp like 2024-05-01T12:30:00.123Z."""
    ts = datetime.datetime.now(datetime.timezone.utc).isoformat(timespec="milliseconds")
    return ts.replace("+00:00", "Z")


def format_timestamp(ts: Any, tz: Optional[datetime.tzinfo] = None) -> str:
    """DD.MM.YYYY, HH:MM:SS in tz (local time when None). Unparsable input comes back as-is."""
    if not isinstance(ts, str) or not ts:
        return ""
    try:
        dt = datetime.datetime.fromisoformat(ts.replace("Z", "+00:00"))
    except ValueError:
        return ts
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=datetime.timezone.utc)
    return dt.astimezone(tz).strftime("%d.%m.%Y, %H:%M:%S")


def _joined(v: Any) -> str:
    if isinstance(v, (list, tuple)):
        return ", ".join(str(x) for x in v)
    return "" if v is None else str(v)


def csv_row(record: Mapping[str, Any], tz: Optional[datetime.tzinfo] = None) -> List[str]:
    return [
        format_timestamp(record.get("timestamp"), tz),
        _joined(record.get("name")) or ANONYMOUS,
        _joined(record.get("email")),
        _joined(record.get("message")),
        _joined(record.get("rating")),
        _joined(record.get("features")),
    ]


def summarize(record: Mapping[str, Any], tz: Optional[datetime.tzinfo] = None) -> Dict[str, str]:
    """Short view of a record for the recent-feedback list."""
    message = _joined(record.get("message"))
    if len(message) > PREVIEW_CHARS:
        message = message[:PREVIEW_CHARS] + "..."
    return {
        "name": _joined(record.get("name")) or ANONYMOUS,
        "message": message,
        "date": format_timestamp(record.get("timestamp"), tz),
    }


class FeedbackStore:
    def __init__(self, storage: LocalStorage, key: str = STORAGE_KEY) -> None:
        self.storage = storage
        self.key = key
        self.records: List[Record] = []
        self.load()

    def _read(self) -> List[Record]:
        data = self.storage.get_item(self.key, [])
        if not isinstance(data, list):
            logger.warning("Storage slot %s does not hold a list; treating as empty", self.key)
            return []
        return [r for r in data if isinstance(r, dict)]

    def load(self) -> List[Record]:
        self.records = self._read()
        return self.records

    def append(self, record: Mapping[str, Any]) -> None:
        existing = self._read()
        existing.append(dict(record))
        self.storage.set_item(self.key, existing)
        self.records = existing

    def submit(self, values: Mapping[str, Any]) -> Record:
        """Stamp values with the current time and append them."""
        record: Record = dict(values)
        record["timestamp"] = now_iso()
        self.append(record)
        return record

    def list_recent(self, n: int = 10) -> List[Record]:
        if n <= 0:
            return []
        return [dict(r) for r in self.load()[-n:]]

    def clear(self) -> None:
        """Delete every record. The caller is responsible for asking the user first."""
        self.storage.remove_item(self.key)
        self.records = []
        logger.info("Cleared all feedback records")

    def export_delimited(self, tz: Optional[datetime.tzinfo] = None) -> Optional[str]:
        """CSV text of every record, or None when there is nothing to export."""
        records = self.load()
        if not records:
            return None
        df = pd.DataFrame([csv_row(r, tz) for r in records], columns=CSV_HEADER)
        return df.to_csv(index=False, quoting=csv.QUOTE_ALL, lineterminator="\n")
