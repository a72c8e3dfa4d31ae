from __future__ import annotations

from typing import Protocol, Sequence

from ledger.domain.transaction import Transaction


class TransactionStore(Protocol):
    def save(self, records: Sequence[Transaction]) -> None:
        """Replace the persisted collection with ``records``."""
        ...

    def load(self) -> list[Transaction]:
        """Return the persisted collection, ``[]`` if nothing was ever saved."""
        ...
