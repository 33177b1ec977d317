from fastapi import APIRouter, Depends

from expense_intake.db.store import ExpenseStore
from expense_intake.routers.expenses import get_store

router = APIRouter(tags=["health"])


@router.get("/health", summary="Liveness probe")
async def health(store: ExpenseStore = Depends(get_store)):
    return {"status": "ok", "expenses": len(store)}
