"""
JSON File Storage Implementation

DESIGN DECISION: A local JSON file stands in for the browser's key-value
storage. The file holds one JSON object; each top-level key is a slot.
We only ever touch our own slot, so other keys in the file survive.

TRADEOFFS:
- The whole file is rewritten on every save (fine for personal use)
- No locking; a single interactive session is the only writer
"""

import json
import os
from pathlib import Path
from typing import Optional, Sequence

import structlog

from expense_tracker.config import get_settings
from expense_tracker.models.expense import ExpenseRecord
from expense_tracker.services.storage.codec import decode_records, encode_records
from expense_tracker.services.storage.interface import (
    DecodeError,
    ExpenseStorageInterface,
    StorageError,
)


logger = structlog.get_logger(__name__)


class JsonFileStorage(ExpenseStorageInterface):
    """
    Expense storage backed by a key-value JSON file.

    Defaults for `path` and `key` come from StorageSettings.
    """

    def __init__(self, path: Optional[str] = None, key: Optional[str] = None):
        settings = get_settings().storage
        self._path = Path(path or settings.path)
        self._key = key or settings.key

    @property
    def path(self) -> Path:
        return self._path

    @property
    def key(self) -> str:
        return self._key

    def _read_slots(self) -> dict:
        """Read the whole key-value document; a missing file is empty."""
        if not self._path.exists():
            return {}
        try:
            text = self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to read {self._path}: {e}")

        if not text.strip():
            return {}
        try:
            slots = json.loads(text)
        except json.JSONDecodeError as e:
            raise DecodeError(f"{self._path} is not valid JSON: {e}") from e
        if not isinstance(slots, dict):
            raise DecodeError(f"{self._path} must contain a JSON object")
        return slots

    def _write_slots(self, slots: dict) -> None:
        """Replace the document atomically (write temp file, then rename)."""
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(slots, indent=2), encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError as e:
            raise StorageError(f"Failed to write {self._path}: {e}")

    def load(self) -> list[ExpenseRecord]:
        slots = self._read_slots()
        records = decode_records(slots.get(self._key))
        logger.debug("storage_loaded", path=str(self._path), key=self._key, count=len(records))
        return records

    def save(self, records: Sequence[ExpenseRecord]) -> None:
        slots = self._read_slots()
        slots[self._key] = encode_records(records)
        self._write_slots(slots)
        logger.debug("storage_saved", path=str(self._path), key=self._key, count=len(records))

    def clear(self) -> None:
        slots = self._read_slots()
        if self._key not in slots:
            return
        del slots[self._key]
        self._write_slots(slots)
        logger.debug("storage_cleared", path=str(self._path), key=self._key)
