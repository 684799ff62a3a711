import logging
from datetime import date
from typing import Any, Callable, Dict, Iterable, Sequence

from daily_budget.dates import days_between_inclusive, to_day
from daily_budget.domain import (
    ANALYSIS_AHEAD,
    ANALYSIS_BEHIND,
    ANALYSIS_ON_TRACK,
    ANALYSIS_OVER_BUDGET,
    STATUS_ACTIVE,
    STATUS_COMPLETED,
    STATUS_EXCEEDED,
    Budget,
    BudgetAnalysis,
    BudgetSummary,
    DailyAllocation,
    DateLike,
    Expense,
)
from daily_budget.engine import (
    calculate_available_budget,
    calculate_daily_base_budget,
    spent_by_day,
    validate_budget_allocation,
)
from daily_budget.functional import Maybe, first_match
from daily_budget.transforms import expenses_in_period

logger = logging.getLogger(__name__)


def total_spent(budget: Budget, expenses: Iterable[Expense]) -> float:
    in_period = expenses_in_period(expenses, budget.start_date, budget.end_date)
    return sum(spent_by_day(in_period).values())


def budget_summary(budget: Budget, expenses: Iterable[Expense], today: DateLike) -> BudgetSummary:
    today = to_day(today)
    spent = total_spent(budget, expenses)
    return BudgetSummary(
        total_budget=budget.monthly_amount,
        total_spent=spent,
        remaining_budget=budget.monthly_amount - spent,
        daily_average=calculate_daily_base_budget(budget, today),
        days_remaining=max(0, (budget.end_date - today).days),
        is_over_budget=spent > budget.monthly_amount,
    )


def budget_status(budget: Budget, expenses: Iterable[Expense], today: DateLike) -> str:
    if to_day(today) > budget.end_date:
        return STATUS_COMPLETED
    if total_spent(budget, expenses) > budget.monthly_amount:
        return STATUS_EXCEEDED
    return STATUS_ACTIVE


def budget_analysis(budget: Budget, expenses: Iterable[Expense], today: DateLike) -> BudgetAnalysis:
    """Compare how much of the budget is spent with how much of the period has passed.

    Progress values are percentages. The projection extends the average
    daily spend so far over the whole period.
    """
    today = to_day(today)
    s = budget_summary(budget, expenses, today)

    total_days = max(1, days_between_inclusive(budget.start_date, budget.end_date))
    passed_days = min(total_days, max(0, (today - budget.start_date).days + 1))

    achievement_rate = s.total_spent / s.total_budget * 100 if s.total_budget > 0 else 0.0
    expected_progress = passed_days / total_days * 100
    actual_progress = achievement_rate

    daily_average_spent = s.total_spent / passed_days if passed_days > 0 else 0.0
    recommended = s.remaining_budget / s.days_remaining if s.days_remaining > 0 else 0.0
    projected = daily_average_spent * total_days
    savings_opportunity = max(0.0, projected - s.total_budget)

    if actual_progress > 100:
        status, risk, message = ANALYSIS_OVER_BUDGET, "high", "monthly budget exceeded"
    elif projected > s.total_budget * 1.1:
        status, risk, message = ANALYSIS_AHEAD, "high", "at the current pace spending will exceed the budget"
    elif actual_progress > expected_progress + 5:
        status, risk, message = ANALYSIS_AHEAD, "low", "spending is slightly ahead of schedule"
    elif actual_progress < expected_progress - 15:
        status, risk, message = ANALYSIS_BEHIND, "low", "spending is well below schedule"
    elif actual_progress < expected_progress - 5:
        status, risk, message = ANALYSIS_BEHIND, "low", "spending is slightly below schedule"
    else:
        status, risk, message = ANALYSIS_ON_TRACK, "low", "spending is on track"

    return BudgetAnalysis(
        total_budget=s.total_budget,
        total_spent=s.total_spent,
        remaining_budget=s.remaining_budget,
        achievement_rate=achievement_rate,
        expected_progress=expected_progress,
        actual_progress=actual_progress,
        days_remaining=s.days_remaining,
        status=status,
        message=message,
        is_over_budget=s.is_over_budget,
        daily_average_spent=daily_average_spent,
        recommended_daily_spend=recommended,
        projected_period_end=projected,
        savings_opportunity=savings_opportunity,
        risk_level=risk,
    )


def allocation_for_day(allocations: Iterable[DailyAllocation], day) -> Maybe[DailyAllocation]:
    target = to_day(day)
    return first_match(allocations, lambda a: a.date == target)


class BudgetService:
    """Facade for budget reports using injected validators and calculators.

    validators: functions taking (budget, expenses, today) -> Sequence[str]
    calculators: functions taking (budget, expenses, today, acc) -> dict (partial results)
    """

    def __init__(self, validators: Sequence[Callable[..., Sequence[str]]], calculators: Sequence[Callable[..., Dict[str, Any]]]):
        self.validators = validators
        self.calculators = calculators

    def budget_report(self, budget: Budget, expenses: Iterable[Expense], today: DateLike) -> Dict[str, Any]:
        """Run validators and calculators and return an aggregated report with intermediate steps."""
        expenses = tuple(expenses)
        today = to_day(today)
        report = {
            "budget_id": budget.id,
            "date": today,
            "validation": [],
            "steps": [],
            "result": {}
        }

        for v in self.validators:
            try:
                msgs = v(budget, expenses, today)
            except Exception as e:
                logger.exception("Validator %s failed for budget %s", getattr(v, "__name__", v), budget.id)
                msgs = [f"validator_error: {e}"]
            report["validation"].append({"validator": getattr(v, "__name__", str(v)), "messages": list(msgs)})

        # calculators see the partial results of the ones before them
        acc: Dict[str, Any] = {}
        for calc in self.calculators:
            out = calc(budget, expenses, today, acc)
            report["steps"].append({"calculator": getattr(calc, "__name__", str(calc)), "output": out})
            if isinstance(out, dict):
                acc.update(out)

        report["result"] = acc
        return report


def allocation_rules(budget: Budget, expenses: Sequence[Expense], today: date) -> Sequence[str]:
    return validate_budget_allocation(budget, expenses).errors


def daily_base(budget: Budget, expenses: Sequence[Expense], today: date, acc: dict) -> dict:
    return {"daily_base": calculate_daily_base_budget(budget, today)}


def available_today(budget: Budget, expenses: Sequence[Expense], today: date, acc: dict) -> dict:
    return {"available_today": calculate_available_budget(today, budget, expenses)}


def summary(budget: Budget, expenses: Sequence[Expense], today: date, acc: dict) -> dict:
    return {"summary": budget_summary(budget, expenses, today)}


def status(budget: Budget, expenses: Sequence[Expense], today: date, acc: dict) -> dict:
    return {"status": budget_status(budget, expenses, today)}


def analysis(budget: Budget, expenses: Sequence[Expense], today: date, acc: dict) -> dict:
    return {"analysis": budget_analysis(budget, expenses, today)}


def default_budget_service() -> BudgetService:
    return BudgetService(
        validators=[allocation_rules],
        calculators=[daily_base, available_today, summary, status, analysis],
    )
