from __future__ import annotations

from typing import Any

from ledger.domain.transaction import TRANSACTION_FIELDS, Transaction
from ledger.repositories.json_file_store import JsonFileStore


class JsonTransactionStore(JsonFileStore[Transaction]):
    file_name = "transactions.json"
    collection_name = "transactions"

    def _to_record(self, tx: Transaction) -> dict[str, Any]:
        return {
            "id": tx.id,
            "description": tx.description,
            "amount": tx.amount,
            "transaction_type": tx.transaction_type,
            "category": tx.category,
            "account": tx.account,
            "month": tx.month,
            "date": tx.date,
        }

    def _from_record(self, data: dict[str, Any], *, ctx: str) -> Transaction:
        values: dict[str, Any] = {}
        for key in TRANSACTION_FIELDS:
            if key == "amount":
                values[key] = self._req_number(data, key, ctx=ctx)
            else:
                values[key] = self._req_str(data, key, ctx=ctx)
        return Transaction(**values)
