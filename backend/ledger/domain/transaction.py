from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Transaction:
    """
    Une ligne du registre, telle que saisie par l'UI.
    - Aucun champ n'est validé ici : le store les traite comme opaques
    - amount signé, convention de signe laissée à l'appelant
    """
    id: str
    description: str
    amount: float
    transaction_type: str
    category: str
    account: str
    month: str
    date: str


# ordre des clés dans transactions.json
TRANSACTION_FIELDS: tuple[str, ...] = (
    "id",
    "description",
    "amount",
    "transaction_type",
    "category",
    "account",
    "month",
    "date",
)
