from __future__ import annotations

from typing import Any

from ledger.domain.category import Category
from ledger.repositories.json_file_store import JsonFileStore


class JsonCategoryStore(JsonFileStore[Category]):
    file_name = "categories.json"
    collection_name = "categories"

    def _to_record(self, category: Category) -> dict[str, Any]:
        return {
            "name": category.name,
            "available_from": category.available_from,
            "initial_budget": category.initial_budget,
            "status": category.status,
        }

    def _from_record(self, data: dict[str, Any], *, ctx: str) -> Category:
        name = self._req_str(data, "name", ctx=ctx)

        # status absent => "active" (anciens fichiers)
        status = self._opt_str(data, "status", ctx=ctx, default="active")
        if status is None:
            raise ValueError(f"{ctx}.status must be a string")

        return Category(
            name=name,
            available_from=self._opt_str(data, "available_from", ctx=ctx),
            initial_budget=self._opt_number(data, "initial_budget", ctx=ctx),
            status=status,
        )
