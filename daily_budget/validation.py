import math
from typing import Any

from daily_budget import config
from daily_budget.dates import to_day
from daily_budget.functional import Either, Left, Right


def _error(field: str, message: str, code: str) -> dict:
    return {"field": field, "message": message, "code": code}


def _amount_errors(field: str, value: Any, label: str, maximum: float) -> list[dict]:
    if value is None or isinstance(value, bool) or not isinstance(value, (int, float)):
        return [_error(field, f"{label} is required", "REQUIRED")]
    if not math.isfinite(value):
        return [_error(field, f"{label} must be a valid number", "INVALID_NUMBER")]
    if value <= 0:
        return [_error(field, f"{label} must be greater than 0", "MIN_VALUE")]
    if value > maximum:
        return [_error(field, f"{label} must not exceed {maximum:,.0f}", "MAX_VALUE")]
    return []


def _date_errors(field: str, value: Any, label: str) -> list[dict]:
    try:
        to_day(value)
    except ValueError:
        return [_error(field, f"{label} is invalid", "INVALID_DATE")]
    return []


def _text_errors(field: str, value: Any, label: str) -> list[dict]:
    if not isinstance(value, str) or not value.strip():
        return [_error(field, f"{label} is required", "REQUIRED")]
    return []


def validate_budget_input(monthly_amount, start_date) -> Either[list[dict], tuple]:
    """Check the fields a user supplies when setting a monthly budget.

    Returns Right((monthly_amount, start_day)) or Left(list of error dicts).
    """
    errors = _amount_errors("monthly_amount", monthly_amount, "monthly budget amount", config.MAX_MONTHLY_AMOUNT)

    if start_date is None:
        errors.append(_error("start_date", "start date is required", "REQUIRED"))
    else:
        errors += _date_errors("start_date", start_date, "start date")

    if errors:
        return Left(errors)
    return Right((monthly_amount, to_day(start_date)))


def validate_expense_input(amount, category_id, description, date=None) -> Either[list[dict], dict]:
    errors = _amount_errors("amount", amount, "expense amount", config.MAX_EXPENSE_AMOUNT)
    errors += _text_errors("category_id", category_id, "category")
    description_errors = _text_errors("description", description, "description")
    errors += description_errors
    if not description_errors and len(description) > config.MAX_DESCRIPTION_LENGTH:
        errors.append(_error(
            "description",
            f"description must be at most {config.MAX_DESCRIPTION_LENGTH} characters",
            "MAX_LENGTH",
        ))
    if date is not None:
        errors += _date_errors("date", date, "expense date")

    if errors:
        return Left(errors)
    return Right({
        "amount": amount,
        "category_id": category_id,
        "description": description.strip(),
        "date": to_day(date) if date is not None else None,
    })
