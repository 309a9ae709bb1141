# src/mongo_todo/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- takes the settings object built once at startup,
- opens the single shared MongoClient and checks the server answers,
- wires the TaskStore and Console into AppState.
"""

from __future__ import annotations

import logging
from typing import Any

from pymongo import MongoClient
from pymongo.errors import PyMongoError

from ..config import get_settings
from ..connectors.console_connector import Console
from ..core.errors import StoreConnectionError
from ..core.ports import Prompter
from ..core.state import AppState
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def connect_store(settings) -> MongoClient:
    """
    Create the client and ping the server.

    Any driver error (bad URI, unreachable host, auth failure) becomes
    StoreConnectionError; the caller treats it as fatal.
    """
    logger.info("Connecting to %s", settings.redacted_uri())
    try:
        client: MongoClient = MongoClient(
            settings.mongo_uri(),
            tz_aware=True,
            serverSelectionTimeoutMS=settings.connect_timeout_ms,
            connectTimeoutMS=settings.connect_timeout_ms,
            appname=settings.app_name,
        )
    except PyMongoError as e:
        raise StoreConnectionError(f"couldn't connect to mongo: {e}", cause=e) from e

    try:
        client.admin.command("ping")
    except PyMongoError as e:
        client.close()
        raise StoreConnectionError(
            f"mongo client couldn't reach {settings.redacted_uri()}: {e}", cause=e
        ) from e

    logger.info("Connected to %s", settings.redacted_uri())
    return client


def create_initial_state(
    *,
    settings=None,
    client: Any = None,
    console: Prompter | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings (and the client) injectable makes the app easier to test
    and avoids hidden global config reads. If settings is None, falls back to
    get_settings(); if client is None, connects with connect_store().
    """
    if settings is None:
        settings = get_settings()

    if client is None:
        client = connect_store(settings)

    collection = client[settings.db_name][settings.collection_name]

    return AppState(
        settings=settings,
        task_store=TaskStore(collection),
        console=console or Console(),
        client=client,
    )
