"""Seed records loaded into a fresh store.

`build_store` returns a store holding the two sample expenses (ids 1 and 2,
next id 3) when seeding is enabled, or an empty store otherwise.
"""

from __future__ import annotations
from typing import Tuple

from expense_intake.core.config import Settings
from expense_intake.models.expense import Expense

from .store import ExpenseStore

SEED_EXPENSES: Tuple[Expense, ...] = (
    Expense(id=1, amount=50.00, description="Groceries", category="Food", date="2023-10-26"),
    Expense(
        id=2,
        amount=15.50,
        description="Movie ticket",
        category="Entertainment",
        date="2023-10-25",
    ),
)


def build_store(settings: Settings) -> ExpenseStore:
    if settings.seed_data:
        return ExpenseStore(SEED_EXPENSES)
    return ExpenseStore()
