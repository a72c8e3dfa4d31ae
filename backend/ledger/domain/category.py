from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Category:
    name: str
    available_from: Optional[str] = None  # "YYYY-MM" côté UI, non vérifié
    initial_budget: Optional[float] = None
    status: str = "active"
