from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy import Float, Integer, String, Text, delete, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Mapped, mapped_column

from ledger.db import init_db, new_session_factory
from ledger.db_base import Base
from ledger.domain.transaction import Transaction
from ledger.errors import ReadError, SerializationError, WriteError

logger = logging.getLogger(__name__)


class TransactionRow(Base):
    __tablename__ = "transactions"

    # position dans la collection : l'id appelant n'est pas unique
    position: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    id: Mapped[str] = mapped_column(String, index=True, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    transaction_type: Mapped[str] = mapped_column(String, nullable=False)
    category: Mapped[str] = mapped_column(String, nullable=False)
    account: Mapped[str] = mapped_column(String, nullable=False)
    month: Mapped[str] = mapped_column(String, index=True, nullable=False)
    date: Mapped[str] = mapped_column(String, nullable=False)


class SqlTransactionStore:
    """Same whole-collection contract as the JSON store, backed by one SQL table."""

    def __init__(self, *, engine: Engine) -> None:
        self._engine = engine
        self._sessions = new_session_factory(engine)

    def save(self, records: Sequence[Transaction]) -> None:
        try:
            rows = [self._to_row(i, tx) for i, tx in enumerate(records)]
        except AttributeError as e:
            raise SerializationError(f"Failed to serialize transactions: {e}") from e

        try:
            init_db(self._engine)
            with self._sessions() as s:
                # delete + insert dans la même transaction : remplacement complet
                s.execute(delete(TransactionRow))
                s.add_all(rows)
                s.commit()
        except SQLAlchemyError as e:
            raise WriteError(f"Failed to write transactions table: {e}") from e

        logger.info("Saved %d transactions to %s", len(rows), self._engine.url)

    def load(self) -> list[Transaction]:
        try:
            init_db(self._engine)
            with self._sessions() as s:
                stmt = select(TransactionRow).order_by(TransactionRow.position)
                out = [self._to_domain(r) for r in s.execute(stmt).scalars().all()]
        except SQLAlchemyError as e:
            raise ReadError(f"Failed to read transactions table: {e}") from e

        logger.info("Loaded %d transactions from %s", len(out), self._engine.url)
        return out

    @staticmethod
    def _to_row(position: int, tx: Transaction) -> TransactionRow:
        return TransactionRow(
            position=position,
            id=tx.id,
            description=tx.description,
            amount=tx.amount,
            transaction_type=tx.transaction_type,
            category=tx.category,
            account=tx.account,
            month=tx.month,
            date=tx.date,
        )

    @staticmethod
    def _to_domain(row: TransactionRow) -> Transaction:
        return Transaction(
            id=row.id,
            description=row.description,
            amount=row.amount,
            transaction_type=row.transaction_type,
            category=row.category,
            account=row.account,
            month=row.month,
            date=row.date,
        )
