from __future__ import annotations

from ledger.api.schemas.categories import CategoryPayload
from ledger.api.schemas.transactions import TransactionPayload
from ledger.domain.category import Category
from ledger.domain.transaction import Transaction


def tx_to_payload(tx: Transaction) -> TransactionPayload:
    return TransactionPayload(
        id=tx.id,
        description=tx.description,
        amount=tx.amount,
        transaction_type=tx.transaction_type,
        category=tx.category,
        account=tx.account,
        month=tx.month,
        date=tx.date,
    )


def payload_to_tx(p: TransactionPayload) -> Transaction:
    return Transaction(
        id=p.id,
        description=p.description,
        amount=p.amount,
        transaction_type=p.transaction_type,
        category=p.category,
        account=p.account,
        month=p.month,
        date=p.date,
    )


def category_to_payload(c: Category) -> CategoryPayload:
    return CategoryPayload(
        name=c.name,
        available_from=c.available_from,
        initial_budget=c.initial_budget,
        status=c.status,
    )


def payload_to_category(p: CategoryPayload) -> Category:
    return Category(
        name=p.name,
        available_from=p.available_from,
        initial_budget=p.initial_budget,
        status=p.status,
    )
