# src/mongo_todo/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .ports import Prompter, TaskRepo


@dataclass
class AppState:
    # Settings live on the state so handlers never read global config.
    settings: Any

    task_store: TaskRepo
    console: Prompter

    # Owned MongoClient (None when a test wires a bare collection).
    client: Any = None

    def close(self) -> None:
        """Close the owned client; the store holds no resources of its own."""
        if self.client is not None:
            self.client.close()
            self.client = None
