"""Daily budget allocation engine.

Turns a monthly budget into a per-day available amount by walking the period
day by day and carrying the signed surplus or deficit of every day into the
next one. All functions are pure: they read the budget and expenses and never
mutate them.
"""
import logging
import math
from collections import defaultdict
from datetime import date
from typing import Iterable, Iterator

from daily_budget.dates import days_between_inclusive, iter_days, to_day, ONE_DAY
from daily_budget.domain import Budget, DailyAllocation, DateLike, Expense, ValidationResult

logger = logging.getLogger(__name__)

MSG_AMOUNT_NOT_POSITIVE = "monthly budget amount must be greater than 0"
MSG_START_NOT_BEFORE_END = "start date must be before end date"
MSG_EXPENSE_OUTSIDE_PERIOD = "expense date is outside the budget period"
MSG_EXPENSE_AMOUNT_INVALID = "expense amount is invalid"


def valid_expenses(expenses: Iterable[Expense]) -> Iterator[tuple[date, Expense]]:
    """Yield (calendar day, expense) for every readable expense.

    Expenses with an unreadable date or a non-finite amount are skipped.
    """
    for e in expenses:
        try:
            day = to_day(e.date)
        except ValueError:
            logger.warning("Skipping expense %s with invalid date %r", e.id, e.date)
            continue
        if not _is_finite_number(e.amount):
            logger.warning("Skipping expense %s with invalid amount %r", e.id, e.amount)
            continue
        yield day, e


def spent_by_day(expenses: Iterable[Expense]) -> dict[date, float]:
    totals: dict[date, float] = defaultdict(float)
    for day, e in valid_expenses(expenses):
        totals[day] += e.amount
    return totals


def calculate_daily_base_budget(budget: Budget, reference_date: DateLike | None = None) -> float:
    # reference_date may lie outside the period; it does not change the share
    total_days = days_between_inclusive(budget.start_date, budget.end_date)
    if total_days < 1:
        total_days = 1
    return budget.monthly_amount / total_days


def calculate_available_budget(target_date: DateLike, budget: Budget, expenses: Iterable[Expense]) -> float:
    """Amount available on target_date after carrying over every earlier day.

    The running carry is signed and unbounded, only the reported value is
    floored at zero.
    """
    target = to_day(target_date)
    base = calculate_daily_base_budget(budget, target)
    spent = spent_by_day(expenses)

    raw_carry = 0.0
    if target > budget.start_date:
        for day in iter_days(budget.start_date, target - ONE_DAY):
            raw_carry = base + raw_carry - spent.get(day, 0.0)

    reported_available = max(0.0, base + raw_carry)
    logger.debug(
        "Available on %s for budget %s: base=%.4f carry=%.4f reported=%.4f",
        target, budget.id, base, raw_carry, reported_available,
    )
    return reported_available


def generate_daily_allocations(
    start_date: DateLike,
    end_date: DateLike,
    daily_base: float,
    budget: Budget,
    expenses: Iterable[Expense],
) -> list[DailyAllocation]:
    start = to_day(start_date)
    end = to_day(end_date)
    spent = spent_by_day(expenses)

    allocations: list[DailyAllocation] = []
    carry = 0.0
    for day in iter_days(start, end):
        spent_amount = spent.get(day, 0.0)
        available = daily_base + carry
        remaining = available - spent_amount
        allocations.append(
            DailyAllocation(
                date=day,
                base_amount=daily_base,
                spent_amount=spent_amount,
                carry_over_amount=carry,
                available_amount=available,
                remaining_amount=remaining,
            )
        )
        carry = remaining

    logger.debug("Generated %d allocations for budget %s", len(allocations), budget.id)
    return allocations


def reallocate_budget(
    new_monthly_amount: float,
    from_date: DateLike,
    budget: Budget,
    expenses: Iterable[Expense],
) -> list[DailyAllocation]:
    """Spread what is left of new_monthly_amount over [from_date, end_date].

    Spend before from_date is subtracted up front, so the walk restarts with
    zero carry. A negative remainder gives a negative daily base.
    """
    current = to_day(from_date)
    expenses = tuple(expenses)
    spent = spent_by_day(expenses)

    spent_so_far = sum(
        amount for day, amount in spent.items() if budget.start_date <= day < current
    )
    remaining_budget = new_monthly_amount - spent_so_far
    remaining_days = max(0, days_between_inclusive(current, budget.end_date))
    new_daily_base = remaining_budget / remaining_days if remaining_days > 0 else 0.0

    logger.info(
        "Reallocating budget %s from %s: amount=%.2f spent=%.2f days=%d base=%.4f",
        budget.id, current, new_monthly_amount, spent_so_far, remaining_days, new_daily_base,
    )
    return generate_daily_allocations(current, budget.end_date, new_daily_base, budget, expenses)


def validate_budget_allocation(budget: Budget, expenses: Iterable[Expense]) -> ValidationResult:
    errors: list[str] = []

    if not (_is_finite_number(budget.monthly_amount) and budget.monthly_amount > 0):
        errors.append(MSG_AMOUNT_NOT_POSITIVE)

    if not budget.start_date < budget.end_date:
        errors.append(MSG_START_NOT_BEFORE_END)

    outside = []
    bad_amounts = []
    for e in expenses:
        if not _within_period(e, budget):
            outside.append(e.id)
        if not (_is_finite_number(e.amount) and e.amount >= 0):
            bad_amounts.append(e.id)

    if outside:
        logger.debug("Expenses outside period of budget %s: %s", budget.id, outside)
        errors.append(MSG_EXPENSE_OUTSIDE_PERIOD)
    if bad_amounts:
        logger.debug("Expenses with invalid amounts for budget %s: %s", budget.id, bad_amounts)
        errors.append(MSG_EXPENSE_AMOUNT_INVALID)

    return ValidationResult(is_valid=not errors, errors=tuple(errors))


def _within_period(e: Expense, budget: Budget) -> bool:
    try:
        day = to_day(e.date)
    except ValueError:
        return False
    return budget.start_date <= day <= budget.end_date


def _is_finite_number(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)
