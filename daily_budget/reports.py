"""Tabular breakdowns of allocations and spending.

Callers that display history or forecasts get plain pandas DataFrames; the
numbers are left unrounded.
"""
from dataclasses import asdict
from datetime import date
from typing import Iterable

import pandas as pd

from daily_budget.dates import iter_days
from daily_budget.domain import DailyAllocation, Expense
from daily_budget.engine import spent_by_day, valid_expenses
from daily_budget.transforms import expenses_in_period

ALLOCATION_COLUMNS = [
    "date",
    "base_amount",
    "spent_amount",
    "carry_over_amount",
    "available_amount",
    "remaining_amount",
]


def allocations_frame(allocations: Iterable[DailyAllocation]) -> pd.DataFrame:
    rows = [asdict(a) for a in allocations]
    df = pd.DataFrame(rows, columns=ALLOCATION_COLUMNS)
    df["date"] = pd.to_datetime(df["date"])
    return df


def daily_trend(expenses: Iterable[Expense], start: date, end: date) -> pd.DataFrame:
    """Spend per calendar day over [start, end], zero-filled.

    Args:
        expenses: expense records, any order
        start: first day of the range
        end: last day of the range

    Returns:
        DataFrame with columns date, amount and cumulative
    """
    spent = spent_by_day(expenses_in_period(expenses, start, end))
    days = list(iter_days(start, end))
    df = pd.DataFrame({
        "date": pd.to_datetime(days),
        "amount": [spent.get(d, 0.0) for d in days],
    })
    df["cumulative"] = df["amount"].cumsum()
    return df


def category_breakdown(expenses: Iterable[Expense], start: date, end: date) -> pd.DataFrame:
    in_range = expenses_in_period(expenses, start, end)
    df = pd.DataFrame(
        [{"category_id": e.category_id, "amount": e.amount} for _, e in valid_expenses(in_range)],
        columns=["category_id", "amount"],
    )
    if df.empty:
        return pd.DataFrame(columns=["category_id", "amount", "percentage"])

    totals = df.groupby("category_id", as_index=False)["amount"].sum()
    grand_total = totals["amount"].sum()
    totals["percentage"] = totals["amount"] / grand_total * 100 if grand_total else 0.0
    return totals.sort_values("amount", ascending=False, ignore_index=True)
