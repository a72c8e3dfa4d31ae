"""Command bridge between the UI layer and the stores.

Each command returns a ``CommandResult``; no exception crosses this
boundary. Store failures come back as ``error`` text (cause + system
detail) and the caller decides whether to retry or notify the user.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Sequence

from pydantic import BaseModel

from ledger.domain.category import Category
from ledger.domain.transaction import Transaction
from ledger.errors import StorageError
from ledger.repositories.json_category_store import JsonCategoryStore
from ledger.repositories.transaction_store import TransactionStore

logger = logging.getLogger(__name__)


class CommandResult(BaseModel):
    success: bool
    data: Any = None
    error: str | None = None

    @classmethod
    def ok(cls, data: Any = None) -> "CommandResult":
        return cls(success=True, data=data)

    @classmethod
    def failure(cls, message: str) -> "CommandResult":
        return cls(success=False, error=message)


def _run(command: str, fn: Callable[[], Any]) -> CommandResult:
    try:
        return CommandResult.ok(fn())
    except StorageError as e:
        logger.exception("%s failed: %s", command, e)
        return CommandResult.failure(str(e))


def save_transactions(store: TransactionStore, collection: Sequence[Transaction]) -> CommandResult:
    return _run("save_transactions", lambda: store.save(collection))


def load_transactions(store: TransactionStore) -> CommandResult:
    return _run("load_transactions", store.load)


def save_categories(store: JsonCategoryStore, collection: Sequence[Category]) -> CommandResult:
    return _run("save_categories", lambda: store.save(collection))


def load_categories(store: JsonCategoryStore) -> CommandResult:
    return _run("load_categories", store.load)
