from __future__ import annotations

from pydantic import BaseModel, Field


class CategoryPayload(BaseModel):
    name: str
    available_from: str | None = Field(default=None, examples=["2024-01"])
    initial_budget: float | None = None
    status: str = Field(default="active", examples=["active", "inactive"])
