"""Domain-level expense validation.

`validate_expense` turns a loosely filled `ExpenseIn` into a `ValidExpense`
or raises the first failing `ExpenseValidationError`. Checks run in a fixed
order: presence of amount, description, category and date, then the amount
value, then the date shape, then the text field types. Nothing here touches
the store, so a rejected payload never causes a partial write.
"""

from __future__ import annotations
import math
import re
from typing import Any

from expense_intake.core.errors import (
    InvalidAmount,
    InvalidDateFormat,
    InvalidText,
    MissingField,
)
from expense_intake.models.expense import ExpenseIn, ValidExpense

# Shape only; 2023-13-32 passes
DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
# Plain decimal notation for string amounts: no underscores, nan or inf
NUMERIC_PATTERN = re.compile(r"\s*[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?\s*")


def coerce_amount(value: Any, *, strict: bool = True) -> float:
    """Return `value` as a positive finite float or raise InvalidAmount.

    JSON numbers are always accepted. Decimal strings such as "12.50" are
    accepted only when `strict` is off. Booleans never count as numbers.
    """
    if isinstance(value, bool):
        raise InvalidAmount()
    if isinstance(value, str) and not strict:
        if not NUMERIC_PATTERN.fullmatch(value):
            raise InvalidAmount()
    elif not isinstance(value, (int, float)):
        raise InvalidAmount()
    try:
        number = float(value)
    except OverflowError:
        raise InvalidAmount() from None
    if not math.isfinite(number) or number <= 0:
        raise InvalidAmount()
    return number


def validate_expense(expense: ExpenseIn, *, strict_amount: bool = True) -> ValidExpense:
    if expense.amount is None:
        raise MissingField("amount")
    for field in ("description", "category", "date"):
        if not getattr(expense, field):
            raise MissingField(field)

    amount = coerce_amount(expense.amount, strict=strict_amount)

    if not isinstance(expense.date, str) or not DATE_PATTERN.fullmatch(expense.date):
        raise InvalidDateFormat()

    for field in ("description", "category"):
        if not isinstance(getattr(expense, field), str):
            raise InvalidText(field)

    return ValidExpense(
        amount=amount,
        description=expense.description,
        category=expense.category,
        date=expense.date,
    )
