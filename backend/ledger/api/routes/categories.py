from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response

from ledger.api.commands import load_categories, save_categories
from ledger.api.deps import get_category_store
from ledger.api.mappers.transaction_mapper import category_to_payload, payload_to_category
from ledger.api.schemas.categories import CategoryPayload
from ledger.repositories.json_category_store import JsonCategoryStore

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=list[CategoryPayload])
def get_categories(store: JsonCategoryStore = Depends(get_category_store)) -> list[CategoryPayload]:
    result = load_categories(store)
    if not result.success:
        raise HTTPException(status_code=500, detail=result.error)

    return [category_to_payload(c) for c in result.data]


@router.put("", status_code=204)
def put_categories(
    payload: list[CategoryPayload],
    store: JsonCategoryStore = Depends(get_category_store),
) -> Response:
    result = save_categories(store, [payload_to_category(p) for p in payload])
    if not result.success:
        raise HTTPException(status_code=500, detail=result.error)

    return Response(status_code=204)
