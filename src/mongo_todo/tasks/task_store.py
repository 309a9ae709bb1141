# src/mongo_todo/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
from collections.abc import Iterator

from bson import ObjectId
from pymongo.errors import PyMongoError

from ..core.errors import NotFoundError, StoreError
from ..core.ports import DocumentCollection
from .task_models import (
    FIELD_ID,
    FIELD_MODIFIED_AT,
    FIELD_TASK,
    Task,
    parse_task_id,
    require_task_text,
    utc_now_millis,
)

logger = logging.getLogger(__name__)


class TaskStore:
    """
    MongoDB task store over a single collection.

    Documents look like:
        {"_id": ObjectId, "task": str, "createdAt": date, "modifiedAt": date}

    The collection (and its client) is owned by the caller; one shared client
    serves every call. There are no retries: driver failures become StoreError.
    """

    def __init__(self, collection: DocumentCollection) -> None:
        self._coll = collection
        try:
            total = self.count_tasks()
        except StoreError:
            total = -1
        logger.info("TaskStore ready collection=%s total=%s", self._name(), total)

    def _name(self) -> str:
        return str(getattr(self._coll, "full_name", None) or getattr(self._coll, "name", "?"))

    @staticmethod
    def _id_filter(task_id: str | ObjectId) -> dict[str, ObjectId]:
        return {FIELD_ID: parse_task_id(task_id)}

    # ---- public API ----

    def count_tasks(self) -> int:
        try:
            return int(self._coll.count_documents({}))
        except PyMongoError as e:
            raise StoreError(f"couldn't count to-dos: {e}", cause=e) from e

    def add_task(self, text: str) -> str:
        task_text = require_task_text(text)
        now = utc_now_millis()
        task = Task(id="", created_at=now, modified_at=now, task=task_text)

        try:
            res = self._coll.insert_one(task.to_document())
        except PyMongoError as e:
            raise StoreError(f"task for to-do list couldn't be created: {e}", cause=e) from e

        inserted = res.inserted_id
        if not isinstance(inserted, ObjectId):
            raise StoreError(f"store returned an unexpected id: {inserted!r}")

        task_id = str(inserted)
        logger.debug("Task added id=%s len=%d", task_id, len(task_text))
        return task_id

    def iter_tasks(self) -> Iterator[Task]:
        """
        Stream every task in store order.

        Lazy and single-use. Rows yielded before a failure stay yielded;
        the failure surfaces as StoreError on the next step.
        """
        try:
            cursor = self._coll.find({})
        except PyMongoError as e:
            raise StoreError(f"couldn't list all to-dos: {e}", cause=e) from e

        n = 0
        try:
            it = iter(cursor)
            while True:
                try:
                    doc = next(it)
                except StopIteration:
                    break
                except PyMongoError as e:
                    raise StoreError(f"all to-do items couldn't be listed: {e}", cause=e) from e
                yield Task.from_document(doc)
                n += 1
        finally:
            close = getattr(cursor, "close", None)
            if close is not None:
                with contextlib.suppress(PyMongoError):
                    close()
            logger.debug("Listed %d tasks", n)

    def get_task(self, task_id: str) -> Task:
        flt = self._id_filter(task_id)
        try:
            doc = self._coll.find_one(flt)
        except PyMongoError as e:
            raise StoreError(f"couldn't read task from db: {e}", cause=e) from e
        if doc is None:
            raise NotFoundError(f"no to-do with ID {flt[FIELD_ID]}")
        return Task.from_document(doc)

    def update_task(self, task_id: str, text: str) -> str:
        """Replace the text; modifiedAt takes the store's current time."""
        flt = self._id_filter(task_id)
        task_text = require_task_text(text)
        try:
            res = self._coll.update_one(
                flt,
                {
                    "$set": {FIELD_TASK: task_text},
                    "$currentDate": {FIELD_MODIFIED_AT: True},
                },
            )
        except PyMongoError as e:
            raise StoreError(f"task for to-do list couldn't be updated: {e}", cause=e) from e

        if res.matched_count == 0:
            raise NotFoundError(f"no to-do with ID {flt[FIELD_ID]}")

        logger.debug("Task updated id=%s", flt[FIELD_ID])
        return str(flt[FIELD_ID])

    def delete_task(self, task_id: str) -> int:
        """Delete by id. Returns deleted count; 0 means nothing matched."""
        flt = self._id_filter(task_id)
        try:
            res = self._coll.delete_one(flt)
        except PyMongoError as e:
            raise StoreError(f"couldn't delete to-do from db: {e}", cause=e) from e

        deleted = int(res.deleted_count)
        logger.debug("Task delete id=%s deleted=%d", flt[FIELD_ID], deleted)
        return deleted
