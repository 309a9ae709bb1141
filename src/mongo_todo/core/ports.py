# src/mongo_todo/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the command loop.

Handlers depend on Protocols instead of concrete implementations,
so tests can wire a fake collection or a scripted console.
"""

from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Protocol

from ..tasks.task_models import Task


class DocumentCollection(Protocol):
    """The subset of pymongo.collection.Collection used by TaskStore."""

    def insert_one(self, document: Mapping[str, Any]) -> Any: ...
    def find(self, filter: Mapping[str, Any] | None = None) -> Iterable[Mapping[str, Any]]: ...
    def find_one(self, filter: Mapping[str, Any]) -> Mapping[str, Any] | None: ...
    def update_one(self, filter: Mapping[str, Any], update: Mapping[str, Any]) -> Any: ...
    def delete_one(self, filter: Mapping[str, Any]) -> Any: ...
    def count_documents(self, filter: Mapping[str, Any]) -> int: ...


class TaskRepo(Protocol):
    def add_task(self, text: str) -> str: ...
    def iter_tasks(self) -> Iterator[Task]: ...
    def get_task(self, task_id: str) -> Task: ...
    def update_task(self, task_id: str, text: str) -> str: ...
    def delete_task(self, task_id: str) -> int: ...
    def count_tasks(self) -> int: ...


class Prompter(Protocol):
    """Console-side port: line input and line output."""

    def read_line(self, prompt: str) -> str: ...
    def show(self, text: str = "") -> None: ...
    def render_tasks(self, tasks: Iterable[Task]) -> int: ...
