from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response

from ledger.api.commands import load_transactions, save_transactions
from ledger.api.deps import get_tx_store
from ledger.api.mappers.transaction_mapper import payload_to_tx, tx_to_payload
from ledger.api.schemas.transactions import TransactionPayload
from ledger.repositories.transaction_store import TransactionStore

router = APIRouter(prefix="/transactions", tags=["transactions"])


# handlers en `def` : FastAPI les exécute dans son threadpool (I/O disque bloquante)
@router.get("", response_model=list[TransactionPayload])
def get_transactions(store: TransactionStore = Depends(get_tx_store)) -> list[TransactionPayload]:
    result = load_transactions(store)
    if not result.success:
        raise HTTPException(status_code=500, detail=result.error)

    return [tx_to_payload(t) for t in result.data]


@router.put("", status_code=204)
def put_transactions(
    payload: list[TransactionPayload],
    store: TransactionStore = Depends(get_tx_store),
) -> Response:
    result = save_transactions(store, [payload_to_tx(p) for p in payload])
    if not result.success:
        raise HTTPException(status_code=500, detail=result.error)

    return Response(status_code=204)
