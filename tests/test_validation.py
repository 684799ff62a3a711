from datetime import date

from daily_budget import config
from daily_budget.validation import validate_budget_input, validate_expense_input


def codes(result):
    return {(e["field"], e["code"]) for e in result.get_error()}


def test_budget_input_ok():
    result = validate_budget_input(3000, "2024-02-10")
    assert result.is_right()
    assert result.get_or_else(None) == (3000, date(2024, 2, 10))


def test_budget_input_amount_rules():
    assert codes(validate_budget_input(None, date(2024, 1, 1))) == {("monthly_amount", "REQUIRED")}
    assert codes(validate_budget_input("100", date(2024, 1, 1))) == {("monthly_amount", "REQUIRED")}
    assert codes(validate_budget_input(float("inf"), date(2024, 1, 1))) == {("monthly_amount", "INVALID_NUMBER")}
    assert codes(validate_budget_input(0, date(2024, 1, 1))) == {("monthly_amount", "MIN_VALUE")}
    assert codes(validate_budget_input(2_000_000, date(2024, 1, 1))) == {("monthly_amount", "MAX_VALUE")}


def test_budget_input_date_rules():
    assert codes(validate_budget_input(100, None)) == {("start_date", "REQUIRED")}
    assert codes(validate_budget_input(100, "someday")) == {("start_date", "INVALID_DATE")}


def test_budget_input_limit_from_config(monkeypatch):
    monkeypatch.setattr(config, "MAX_MONTHLY_AMOUNT", 500.0)
    assert codes(validate_budget_input(600, date(2024, 1, 1))) == {("monthly_amount", "MAX_VALUE")}


def test_expense_input_ok():
    result = validate_expense_input(12.5, "food", "  lunch ", "2024-01-03T12:00:00")
    assert result.is_right()
    assert result.get_or_else(None) == {
        "amount": 12.5,
        "category_id": "food",
        "description": "lunch",
        "date": date(2024, 1, 3),
    }


def test_expense_input_collects_all_errors():
    result = validate_expense_input(-1, " ", "", "bad")
    assert codes(result) == {
        ("amount", "MIN_VALUE"),
        ("category_id", "REQUIRED"),
        ("description", "REQUIRED"),
        ("date", "INVALID_DATE"),
    }


def test_expense_input_limits():
    assert codes(validate_expense_input(100_001, "food", "tv")) == {("amount", "MAX_VALUE")}
    assert codes(validate_expense_input(5, "food", "x" * 201)) == {("description", "MAX_LENGTH")}
