"""In-memory expense store.

Responsibilities
----------------
- Hold the ordered sequence of expense records and the next-id counter.
- Allocate ids and append records atomically under a single lock.
- Hand out snapshot copies so callers never see a half-applied insert.

Records live only as long as the store object; each application instance
owns its own store.
"""

from __future__ import annotations

import threading
from typing import Iterable, List

from expense_intake.models.expense import Expense, ValidExpense


class ExpenseStore:
    def __init__(self, seed: Iterable[Expense] = ()):
        self._lock = threading.Lock()
        self._expenses: List[Expense] = [e.model_copy() for e in seed]
        ids = [e.id for e in self._expenses]
        if len(set(ids)) != len(ids) or ids != sorted(ids):
            raise ValueError("seed ids must be unique and increasing")
        self._next_id = (ids[-1] + 1) if ids else 1

    def __len__(self) -> int:
        with self._lock:
            return len(self._expenses)

    @property
    def next_id(self) -> int:
        return self._next_id

    def list_expenses(self) -> List[Expense]:
        with self._lock:
            return [e.model_copy() for e in self._expenses]

    def insert_expense(self, expense: ValidExpense) -> Expense:
        with self._lock:
            record = Expense(id=self._next_id, **expense.model_dump())
            self._next_id += 1
            self._expenses.append(record)
        return record.model_copy()
