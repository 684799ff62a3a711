import json
import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Iterable, Tuple
from uuid import uuid4

from daily_budget import config
from daily_budget.dates import days_in_month, month_bounds, same_month, to_day
from daily_budget.domain import Budget, Expense
from daily_budget.engine import (
    calculate_daily_base_budget,
    generate_daily_allocations,
    reallocate_budget,
)
from daily_budget.functional import Either, Maybe, first_match
from daily_budget.validation import validate_budget_input

logger = logging.getLogger(__name__)


def _parse_timestamp(value):
    return datetime.fromisoformat(value) if isinstance(value, str) else value


def _budget_from_dict(data: dict) -> Budget:
    return Budget(
        id=data["id"],
        monthly_amount=float(data["monthly_amount"]),
        start_date=to_day(data["start_date"]),
        end_date=to_day(data["end_date"]),
        created_at=_parse_timestamp(data.get("created_at")),
        updated_at=_parse_timestamp(data.get("updated_at")),
    )


def _expense_from_dict(data: dict) -> Expense:
    return Expense(
        id=data["id"],
        amount=float(data["amount"]),
        category_id=data.get("category_id", ""),
        description=data.get("description", ""),
        date=data["date"],
        created_at=_parse_timestamp(data.get("created_at")),
        updated_at=_parse_timestamp(data.get("updated_at")),
    )


def load_seed(path=None) -> Tuple[Tuple[Budget, ...], Tuple[Expense, ...]]:
    """Read budgets and expenses from a JSON seed, config.SEED_PATH by default."""
    path = path or config.SEED_PATH
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    budgets = tuple(_budget_from_dict(b) for b in data["budgets"])
    expenses = tuple(_expense_from_dict(e) for e in data["expenses"])

    logger.info("Loaded %d budgets and %d expenses from %s", len(budgets), len(expenses), path)
    return budgets, expenses


def add_expense(expenses: Tuple[Expense, ...], e: Expense) -> Tuple[Expense, ...]:
    return expenses + (e,)


def expenses_in_period(expenses: Iterable[Expense], start: date, end: date) -> Tuple[Expense, ...]:
    """Expenses whose calendar day lies in [start, end]; unreadable dates are dropped."""
    def _inside(e: Expense) -> bool:
        try:
            return start <= to_day(e.date) <= end
        except ValueError:
            return False

    return tuple(filter(_inside, expenses))


def create_monthly_budget(
    monthly_amount: float,
    start_date,
    expenses: Iterable[Expense],
    now: datetime | None = None,
) -> Either[list[dict], Budget]:
    """Build a budget spanning the calendar month that contains start_date."""
    checked = validate_budget_input(monthly_amount, start_date)
    if checked.is_left():
        return checked

    amount, day = checked.get_or_else(None)
    first, last = month_bounds(day)
    now = now or datetime.now()
    budget = Budget(
        id=str(uuid4()),
        monthly_amount=amount,
        start_date=first,
        end_date=last,
        created_at=now,
        updated_at=now,
    )
    allocations = generate_daily_allocations(first, last, amount / days_in_month(first), budget, expenses)

    logger.info("Created budget %s for %s..%s amount=%.2f", budget.id, first, last, amount)
    return checked.map(lambda _: replace(budget, daily_allocation=tuple(allocations)))


def update_monthly_amount(
    budget: Budget,
    new_amount: float,
    from_date,
    expenses: Iterable[Expense],
    now: datetime | None = None,
) -> Either[list[dict], Budget]:
    """Replace budget with one for new_amount, reallocating from from_date on.

    The replacement gets a new id and keeps the original period.
    """
    checked = validate_budget_input(new_amount, from_date)
    if checked.is_left():
        return checked

    allocations = reallocate_budget(new_amount, from_date, budget, expenses)
    replacement = replace(
        budget,
        id=str(uuid4()),
        monthly_amount=new_amount,
        daily_allocation=tuple(allocations),
        updated_at=now or datetime.now(),
    )
    logger.info("Budget %s replaced by %s with amount %.2f", budget.id, replacement.id, new_amount)
    return checked.map(lambda _: replacement)


def refresh_allocations(budget: Budget, expenses: Iterable[Expense], now: datetime | None = None) -> Budget:
    allocations = generate_daily_allocations(
        budget.start_date,
        budget.end_date,
        calculate_daily_base_budget(budget),
        budget,
        expenses,
    )
    return replace(budget, daily_allocation=tuple(allocations), updated_at=now or datetime.now())


def upsert_budget(budgets: Tuple[Budget, ...], budget: Budget) -> Tuple[Budget, ...]:
    """Replace the first budget with the same id or month, else append."""
    for i, b in enumerate(budgets):
        if b.id == budget.id or same_month(b.start_date, budget.start_date):
            return budgets[:i] + (budget,) + budgets[i + 1:]
    return budgets + (budget,)


def delete_budget(budgets: Tuple[Budget, ...], budget_id: str) -> Tuple[Budget, ...]:
    return tuple(b for b in budgets if b.id != budget_id)


def current_month_budget(budgets: Iterable[Budget], today: date) -> Maybe[Budget]:
    return first_match(budgets, lambda b: same_month(b.start_date, today))
