"""Tests for the ordered expense validation rules."""

from __future__ import annotations

import math

import pytest

from expense_intake.core.errors import (
    ExpenseValidationError,
    InvalidAmount,
    InvalidDateFormat,
    InvalidText,
    MissingField,
)
from expense_intake.models.expense import ExpenseIn
from expense_intake.services.expense_validation import coerce_amount, validate_expense


def _payload(**overrides) -> ExpenseIn:
    data = {"amount": 10, "description": "x", "category": "y", "date": "2023-01-01"}
    data.update(overrides)
    return ExpenseIn(**{k: v for k, v in data.items() if v is not ...})


class TestMissingFields:
    def test_missing_amount(self) -> None:
        with pytest.raises(MissingField) as exc:
            validate_expense(_payload(amount=...))
        assert exc.value.field == "amount"
        assert exc.value.message == "Missing required field: amount"

    def test_null_amount_counts_as_missing(self) -> None:
        with pytest.raises(MissingField, match="amount"):
            validate_expense(_payload(amount=None))

    @pytest.mark.parametrize("field", ["description", "category", "date"])
    def test_empty_text_field(self, field: str) -> None:
        with pytest.raises(MissingField) as exc:
            validate_expense(_payload(**{field: ""}))
        assert exc.value.field == field

    def test_checks_run_in_fixed_order(self) -> None:
        """With everything missing, amount is reported first."""
        with pytest.raises(MissingField) as exc:
            validate_expense(ExpenseIn())
        assert exc.value.field == "amount"

        with pytest.raises(MissingField) as exc:
            validate_expense(ExpenseIn(amount=5))
        assert exc.value.field == "description"

        with pytest.raises(MissingField) as exc:
            validate_expense(ExpenseIn(amount=5, description="d"))
        assert exc.value.field == "category"

    def test_missing_field_wins_over_bad_amount(self) -> None:
        with pytest.raises(MissingField, match="date"):
            validate_expense(_payload(amount=-1, date=None))


class TestAmount:
    @pytest.mark.parametrize("amount", [-5, 0, 0.0, "abc", "", True, float("nan"), float("inf")])
    def test_rejected(self, amount) -> None:
        with pytest.raises(InvalidAmount, match="Amount must be a positive number"):
            validate_expense(_payload(amount=amount))

    def test_numeric_string_rejected_by_default(self) -> None:
        with pytest.raises(InvalidAmount):
            validate_expense(_payload(amount="12.75"))

    def test_lenient_mode_coerces_numeric_string(self) -> None:
        result = validate_expense(_payload(amount=" 12.75 "), strict_amount=False)
        assert result.amount == 12.75

    @pytest.mark.parametrize("amount", ["1_000", "nan", "inf", "-infinity", "12,5", "0x10", "1e400"])
    def test_lenient_mode_rejects_non_decimal_strings(self, amount: str) -> None:
        with pytest.raises(InvalidAmount):
            validate_expense(_payload(amount=amount), strict_amount=False)

    def test_lenient_mode_accepts_exponent(self) -> None:
        assert coerce_amount("1.5e2", strict=False) == 150.0

    def test_numbers_accepted_in_both_modes(self) -> None:
        assert validate_expense(_payload(amount=3)).amount == 3.0
        assert validate_expense(_payload(amount=3), strict_amount=False).amount == 3.0

    def test_huge_integer_rejected(self) -> None:
        with pytest.raises(InvalidAmount):
            coerce_amount(10**400)

    def test_result_is_finite_float(self) -> None:
        value = coerce_amount(7)
        assert isinstance(value, float)
        assert math.isfinite(value)

    def test_amount_checked_before_date(self) -> None:
        with pytest.raises(InvalidAmount):
            validate_expense(_payload(amount=-5, date="2023/01/01"))


class TestDate:
    @pytest.mark.parametrize(
        "value", ["2023/01/01", "23-01-01", "2023-1-1", "2023-01-01T00:00", " 2023-01-01"]
    )
    def test_bad_shape(self, value: str) -> None:
        with pytest.raises(InvalidDateFormat, match="YYYY-MM-DD"):
            validate_expense(_payload(date=value))

    def test_non_string_date(self) -> None:
        with pytest.raises(InvalidDateFormat):
            validate_expense(_payload(date=20230101))

    def test_calendar_validity_not_checked(self) -> None:
        result = validate_expense(_payload(date="2023-13-32"))
        assert result.date == "2023-13-32"


class TestTextFields:
    @pytest.mark.parametrize("field", ["description", "category"])
    def test_non_string_rejected(self, field: str) -> None:
        with pytest.raises(InvalidText) as exc:
            validate_expense(_payload(**{field: 5}))
        assert exc.value.field == field
        assert exc.value.message == f"Field {field} must be a string"

    def test_date_checked_before_text_types(self) -> None:
        with pytest.raises(InvalidDateFormat):
            validate_expense(_payload(description=5, date="2023/01/01"))

    def test_whitespace_text_is_present(self) -> None:
        assert validate_expense(_payload(description=" ")).description == " "


def test_valid_payload_passes_through() -> None:
    result = validate_expense(_payload(amount=10, description="Lunch", category="Food"))
    assert result.model_dump() == {
        "amount": 10.0,
        "description": "Lunch",
        "category": "Food",
        "date": "2023-01-01",
    }


def test_all_validation_errors_share_base() -> None:
    for exc in (MissingField("amount"), InvalidAmount(), InvalidDateFormat(), InvalidText("category")):
        assert isinstance(exc, ExpenseValidationError)
        assert exc.status_code == 400
