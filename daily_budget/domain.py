from dataclasses import dataclass
from datetime import date, datetime
from typing import Union

DateLike = Union[date, datetime, str]

STATUS_ACTIVE = "active"
STATUS_COMPLETED = "completed"
STATUS_EXCEEDED = "exceeded"


@dataclass(frozen=True)
class DailyAllocation:
    date: date
    base_amount: float        # uniform daily share
    spent_amount: float       # spent on this calendar day
    carry_over_amount: float  # signed, from all earlier days of the walk
    available_amount: float   # base + carry, not floored
    remaining_amount: float   # available - spent


@dataclass(frozen=True)
class Budget:
    id: str
    monthly_amount: float
    start_date: date
    end_date: date
    daily_allocation: tuple[DailyAllocation, ...] = ()
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class Expense:
    id: str
    amount: float
    category_id: str
    description: str
    date: DateLike    # only the calendar day is ever read
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    errors: tuple[str, ...] = ()


@dataclass(frozen=True)
class BudgetSummary:
    total_budget: float
    total_spent: float
    remaining_budget: float
    daily_average: float
    days_remaining: int
    is_over_budget: bool


ANALYSIS_ON_TRACK = "on_track"
ANALYSIS_AHEAD = "ahead"
ANALYSIS_BEHIND = "behind"
ANALYSIS_OVER_BUDGET = "over_budget"


@dataclass(frozen=True)
class BudgetAnalysis:
    total_budget: float
    total_spent: float
    remaining_budget: float
    achievement_rate: float      # percent of the budget spent
    expected_progress: float     # percent of the period elapsed
    actual_progress: float
    days_remaining: int
    status: str
    message: str
    is_over_budget: bool
    daily_average_spent: float
    recommended_daily_spend: float
    projected_period_end: float
    savings_opportunity: float
    risk_level: str              # low or high
