"""
Serialization of the expense collection.

The persisted form is a JSON array of
{"id": int, "amount": number, "category": str, "date": ISO-8601 str}.
Browser-written payloads carry UTC dates ("2024-03-15T08:00:00.000Z");
those are converted to local time by the record model.
"""

import json
from typing import Any, Sequence

from pydantic import ValidationError as SchemaValidationError

from expense_tracker.models.expense import ExpenseRecord
from expense_tracker.services.storage.interface import DecodeError


REQUIRED_FIELDS = ("id", "amount", "category", "date")


def encode_records(records: Sequence[ExpenseRecord]) -> list[dict]:
    """Convert records to their JSON-ready shape."""
    return [record.to_storage_dict() for record in records]


def dumps_records(records: Sequence[ExpenseRecord]) -> str:
    return json.dumps(encode_records(records))


def decode_record(raw: Any, index: int) -> ExpenseRecord:
    """
    Decode a single persisted record.

    Raises DecodeError naming the index and the failing field(s).
    """
    if not isinstance(raw, dict):
        raise DecodeError(f"Record {index}: expected an object, got {type(raw).__name__}")

    missing = [name for name in REQUIRED_FIELDS if name not in raw]
    if missing:
        raise DecodeError(f"Record {index}: missing field(s) {', '.join(missing)}")

    # bool is an int subclass; true/false are never valid ids or amounts
    if isinstance(raw["id"], bool) or not isinstance(raw["id"], int):
        raise DecodeError(f"Record {index}: id must be an integer")
    if isinstance(raw["amount"], bool) or not isinstance(raw["amount"], (int, float)):
        raise DecodeError(f"Record {index}: amount must be a number")
    if not isinstance(raw["date"], str):
        raise DecodeError(f"Record {index}: date must be an ISO-8601 string")

    try:
        return ExpenseRecord.model_validate(
            {name: raw[name] for name in REQUIRED_FIELDS}
        )
    except SchemaValidationError as e:
        fields = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
        raise DecodeError(
            f"Record {index}: invalid {', '.join(fields) or 'record'}"
        ) from e


def decode_records(payload: Any) -> list[ExpenseRecord]:
    """Decode an already-parsed JSON value into records."""
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise DecodeError(f"Expected a list of expenses, got {type(payload).__name__}")

    records = [decode_record(raw, index) for index, raw in enumerate(payload)]

    seen = set()
    for index, record in enumerate(records):
        if record.id in seen:
            raise DecodeError(f"Record {index}: duplicate id {record.id}")
        seen.add(record.id)

    return records


def loads_records(text: str) -> list[ExpenseRecord]:
    """Decode a JSON string into records."""
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise DecodeError(f"Stored expenses are not valid JSON: {e}") from e
    return decode_records(payload)
