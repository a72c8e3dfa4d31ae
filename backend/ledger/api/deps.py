from __future__ import annotations

from functools import lru_cache

from ledger.db import get_engine
from ledger.settings import get_app_data_directory, get_settings
from ledger.repositories.json_category_store import JsonCategoryStore
from ledger.repositories.json_transaction_store import JsonTransactionStore
from ledger.repositories.sql_transaction_store import SqlTransactionStore
from ledger.repositories.transaction_store import TransactionStore


@lru_cache
def get_tx_store() -> TransactionStore:
    # If FAMILYLEDGER_DATABASE_URL is set -> use SQL store (Postgres/SQLite)
    settings = get_settings()
    if settings.database_url:
        return SqlTransactionStore(engine=get_engine(settings.database_url))

    return JsonTransactionStore(directory_provider=get_app_data_directory)


@lru_cache
def get_category_store() -> JsonCategoryStore:
    return JsonCategoryStore(directory_provider=get_app_data_directory)
