from __future__ import annotations
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ExpenseIn(BaseModel):
    """Create payload as received on the wire.

    Every field is optional so that missing values are reported by
    `validate_expense` in a fixed order rather than by the body parser.
    Values are kept as the raw JSON scalars; type checks and amount
    coercion happen during validation so they report domain errors.
    """

    model_config = ConfigDict(extra="ignore")

    amount: Any = None
    description: Any = None
    category: Any = None
    date: Any = None


class ValidExpense(BaseModel):
    """Create payload after domain validation, ready for the store."""

    amount: float = Field(..., gt=0)
    description: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    date: str = Field(..., pattern=r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")


class Expense(BaseModel):
    """Stored expense record; also the response shape."""

    id: int = Field(..., gt=0)
    amount: float
    description: str
    category: str
    date: str
