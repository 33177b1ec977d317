"""Pydantic models for the expense intake API."""

from .expense import Expense, ExpenseIn, ValidExpense

__all__ = [
    "Expense",
    "ExpenseIn",
    "ValidExpense",
]
