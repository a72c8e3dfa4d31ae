from __future__ import annotations

from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from ledger.db_base import Base


@lru_cache
def get_engine(url: str) -> Engine:
    # sqlite needs check_same_thread for FastAPI threadpool access
    connect_args = {}
    if url.startswith("sqlite:///"):
        connect_args = {"check_same_thread": False}

    return create_engine(url, future=True, connect_args=connect_args)


def new_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


def init_db(engine: Engine) -> None:
    # import here to avoid circular imports
    from ledger.repositories.sql_transaction_store import TransactionRow  # noqa

    Base.metadata.create_all(engine)
