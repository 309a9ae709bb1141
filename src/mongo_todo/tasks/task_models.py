# src/mongo_todo/tasks/task_models.py

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from bson import ObjectId
from bson.errors import InvalidId

from ..core.errors import StoreError, ValidationError

# Field names of the persisted document. This is the wire contract with the store.
FIELD_ID = "_id"
FIELD_TASK = "task"
FIELD_CREATED_AT = "createdAt"
FIELD_MODIFIED_AT = "modifiedAt"

DISPLAY_DATE_FORMAT = "%m/%d/%Y"


def utc_now_millis() -> datetime:
    """Current UTC time truncated to whole milliseconds (BSON date precision)."""
    now = datetime.now(UTC)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def as_utc(value: datetime) -> datetime:
    # pymongo returns naive UTC datetimes unless the client is tz_aware.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def parse_task_id(raw: str | ObjectId | None) -> ObjectId:
    """
    Parse a user-supplied identifier into an ObjectId.

    Blank input and anything that is not a 24-char hex ObjectId raise ValidationError.
    """
    if isinstance(raw, ObjectId):
        return raw
    text = (raw or "").strip()
    if not text:
        raise ValidationError("can't look up a to-do item with no task ID")
    try:
        return ObjectId(text)
    except (InvalidId, TypeError) as e:
        raise ValidationError(f"couldn't get object ID from given input {text!r}", cause=e) from e


def require_task_text(raw: str | None) -> str:
    """Reject blank text; return the text exactly as given."""
    if raw is None or not raw.strip():
        raise ValidationError("can't save a to-do item with no task")
    return raw


@dataclass(slots=True)
class Task:
    id: str
    created_at: datetime
    modified_at: datetime
    task: str

    def to_document(self) -> dict[str, Any]:
        """Insert shape (the store assigns _id)."""
        return {
            FIELD_TASK: self.task,
            FIELD_CREATED_AT: self.created_at,
            FIELD_MODIFIED_AT: self.modified_at,
        }

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> Task:
        """
        Typed decode of a stored document.

        Any missing or mistyped field raises StoreError; nothing is cast blindly.
        """
        if not isinstance(doc, Mapping):
            raise StoreError(f"stored to-do is not a document: {type(doc).__name__}")

        raw_id = doc.get(FIELD_ID)
        if not isinstance(raw_id, ObjectId):
            raise StoreError(f"stored to-do has invalid {FIELD_ID}: {raw_id!r}")

        text = doc.get(FIELD_TASK)
        if not isinstance(text, str):
            raise StoreError(f"stored to-do {raw_id} has invalid {FIELD_TASK}: {text!r}")

        stamps: dict[str, datetime] = {}
        for name in (FIELD_CREATED_AT, FIELD_MODIFIED_AT):
            value = doc.get(name)
            if not isinstance(value, datetime):
                raise StoreError(f"stored to-do {raw_id} has invalid {name}: {value!r}")
            stamps[name] = as_utc(value)

        return cls(
            id=str(raw_id),
            created_at=stamps[FIELD_CREATED_AT],
            modified_at=stamps[FIELD_MODIFIED_AT],
            task=text,
        )


def format_for_display(value: datetime) -> str:
    return as_utc(value).strftime(DISPLAY_DATE_FORMAT)
