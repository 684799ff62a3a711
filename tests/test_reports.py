from datetime import date

import pandas as pd
import pytest

from daily_budget.domain import Budget, Expense
from daily_budget.engine import generate_daily_allocations
from daily_budget.reports import ALLOCATION_COLUMNS, allocations_frame, category_breakdown, daily_trend


def make_exp(id, amount, day, cat):
    return Expense(id=id, amount=amount, category_id=cat, description="", date=day)


EXPENSES = (
    make_exp("e1", 30, date(2024, 1, 1), "food"),
    make_exp("e2", 10, date(2024, 1, 3), "transport"),
    make_exp("e3", 20, "2024-01-03T19:00:00", "food"),
    make_exp("e4", 500, date(2024, 2, 1), "rent"),
)


def test_allocations_frame():
    budget = Budget(id="b1", monthly_amount=120, start_date=date(2024, 1, 1), end_date=date(2024, 1, 3))
    allocs = generate_daily_allocations(date(2024, 1, 1), date(2024, 1, 3), 40, budget, EXPENSES)
    df = allocations_frame(allocs)

    assert list(df.columns) == ALLOCATION_COLUMNS
    assert len(df) == 3
    assert df["date"].iloc[0] == pd.Timestamp("2024-01-01")
    assert df["remaining_amount"].tolist() == [10, 50, 60]


def test_allocations_frame_empty_keeps_columns():
    df = allocations_frame([])
    assert df.empty
    assert list(df.columns) == ALLOCATION_COLUMNS


def test_daily_trend_zero_fills():
    df = daily_trend(EXPENSES, date(2024, 1, 1), date(2024, 1, 4))
    assert df["amount"].tolist() == [30, 0, 30, 0]
    assert df["cumulative"].tolist() == [30, 30, 60, 60]
    assert df["date"].iloc[-1] == pd.Timestamp("2024-01-04")


def test_category_breakdown():
    df = category_breakdown(EXPENSES, date(2024, 1, 1), date(2024, 1, 31))
    assert df["category_id"].tolist() == ["food", "transport"]
    assert df["amount"].tolist() == [50, 10]
    assert df["percentage"].tolist() == pytest.approx([50 / 60 * 100, 10 / 60 * 100])


def test_category_breakdown_empty_range():
    df = category_breakdown(EXPENSES, date(2023, 1, 1), date(2023, 1, 31))
    assert df.empty
    assert list(df.columns) == ["category_id", "amount", "percentage"]


def test_category_breakdown_skips_malformed_amounts():
    exps = EXPENSES + (
        make_exp("nan", float("nan"), date(2024, 1, 2), "food"),
        make_exp("none", None, date(2024, 1, 2), "gifts"),
    )
    df = category_breakdown(exps, date(2024, 1, 1), date(2024, 1, 31))
    assert df["category_id"].tolist() == ["food", "transport"]
    assert df["amount"].tolist() == [50, 10]
