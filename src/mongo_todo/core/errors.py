# src/mongo_todo/core/errors.py

"""
Error taxonomy shared by the store, the console and the command loop.

Every failure the user can see is a TodoError subclass. Driver exceptions
(pymongo) never leave the store layer unwrapped.
"""

from __future__ import annotations

from typing import Optional, TypeVar

_E = TypeVar("_E", bound="TodoError")


class TodoError(Exception):
    """Base class for all to-do failures."""

    def __init__(self, message: str, *, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def wrap(self: _E, context: str) -> _E:
        """Return a copy of this error (same class) prefixed with `context`."""
        return type(self)(f"{context}: {self.message}", cause=self.cause or self)

    def __str__(self) -> str:
        return self.message


class ValidationError(TodoError):
    """Blank text, malformed identifier, invalid command selector or missing input."""


class NotFoundError(TodoError):
    """Well-formed identifier that matches no record."""


class StoreError(TodoError):
    """Connection, I/O or decode failure against the record store."""


class StoreConnectionError(StoreError):
    """The record store could not be reached at startup."""
