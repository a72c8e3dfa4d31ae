from fastapi import FastAPI

from ledger.api.routes.health import router as health_router
from ledger.api.routes.transactions import router as transactions_router
from ledger.api.routes.categories import router as categories_router


app = FastAPI(title="Family Ledger API", version="0.1.0")

app.include_router(health_router)
app.include_router(transactions_router)
app.include_router(categories_router)
