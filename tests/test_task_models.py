# tests/test_task_models.py

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from bson import ObjectId

from mongo_todo.core.errors import StoreError, ValidationError
from mongo_todo.tasks.task_models import (
    Task,
    format_for_display,
    parse_task_id,
    utc_now_millis,
)


def _doc(**overrides):
    stamp = datetime(2024, 3, 9, 14, 30, 0, 123000, tzinfo=UTC)
    doc = {"_id": ObjectId(), "task": "buy milk", "createdAt": stamp, "modifiedAt": stamp}
    doc.update(overrides)
    return doc


def test_parse_task_id_accepts_hex_with_whitespace() -> None:
    oid = ObjectId()
    assert parse_task_id(f"  {oid}\n") == oid
    assert parse_task_id(oid) is oid


@pytest.mark.parametrize("raw", ["", "   ", None, "not-an-id", "123", "z" * 24])
def test_parse_task_id_rejects_malformed(raw) -> None:
    with pytest.raises(ValidationError):
        parse_task_id(raw)


def test_from_document_decodes_all_fields() -> None:
    doc = _doc()
    task = Task.from_document(doc)
    assert task.id == str(doc["_id"])
    assert task.task == "buy milk"
    assert task.created_at == doc["createdAt"]
    assert task.modified_at == doc["modifiedAt"]


def test_from_document_treats_naive_dates_as_utc() -> None:
    naive = datetime(2024, 1, 2, 3, 4, 5)
    task = Task.from_document(_doc(createdAt=naive, modifiedAt=naive))
    assert task.created_at.tzinfo is not None
    assert task.created_at == naive.replace(tzinfo=UTC)


@pytest.mark.parametrize(
    "overrides",
    [
        {"_id": "abc"},
        {"task": 42},
        {"task": None},
        {"createdAt": 1700000000000},
        {"modifiedAt": "2024-01-01"},
    ],
)
def test_from_document_rejects_mistyped_fields(overrides) -> None:
    with pytest.raises(StoreError):
        Task.from_document(_doc(**overrides))


def test_from_document_rejects_missing_field() -> None:
    doc = _doc()
    del doc["modifiedAt"]
    with pytest.raises(StoreError):
        Task.from_document(doc)


def test_to_document_has_wire_field_names() -> None:
    now = utc_now_millis()
    doc = Task(id="", created_at=now, modified_at=now, task="x").to_document()
    assert doc == {"task": "x", "createdAt": now, "modifiedAt": now}


def test_utc_now_millis_has_millisecond_precision() -> None:
    now = utc_now_millis()
    assert now.tzinfo is not None
    assert now.microsecond % 1000 == 0


def test_format_for_display_is_month_day_year() -> None:
    assert format_for_display(datetime(2024, 3, 9, 23, 59, tzinfo=UTC)) == "03/09/2024"
