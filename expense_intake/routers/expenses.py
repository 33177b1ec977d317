import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Request

from expense_intake.core.config import Settings
from expense_intake.db.store import ExpenseStore
from expense_intake.models.expense import Expense, ExpenseIn
from expense_intake.services.expense_validation import validate_expense

router = APIRouter(prefix="/expenses", tags=["expenses"])
logger = logging.getLogger("expense_intake.expenses")

# Every other method on the resource is answered with 405 by the error handlers
ALLOWED_METHODS = ("GET", "POST")

# Dependencies -----------------------------------------------------


def get_store(request: Request) -> ExpenseStore:
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


# Routes -----------------------------------------------------------
@router.get("", response_model=List[Expense], summary="List all expenses")
async def list_expenses(store: ExpenseStore = Depends(get_store)):
    return store.list_expenses()


@router.post(
    "", response_model=Expense, status_code=201, summary="Create an expense"
)
async def create_expense(
    payload: Optional[ExpenseIn] = None,
    store: ExpenseStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    # 1. Ordered field checks; raises before any mutation
    valid = validate_expense(
        payload or ExpenseIn(), strict_amount=settings.strict_amount_type
    )
    # 2. Allocate id and append
    expense = store.insert_expense(valid)
    logger.info(
        "expense created category=%s", expense.category, extra={"expense_id": expense.id}
    )
    return expense
