from __future__ import annotations

from pydantic import BaseModel, Field


class TransactionPayload(BaseModel):
    id: str = Field(..., description="Caller-assigned identifier (not checked for uniqueness)")
    description: str
    amount: float = Field(..., examples=[-4.5, 1200.0], description="Signed amount, sign convention owned by the UI")
    transaction_type: str = Field(..., examples=["income", "expense"])
    category: str
    account: str
    month: str = Field(..., examples=["2024-01"])
    date: str = Field(..., examples=["2024-01-15"])
