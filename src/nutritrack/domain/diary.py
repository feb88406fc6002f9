"""Derived diary views. None of these are persisted."""

from dataclasses import dataclass
from datetime import date
from enum import Enum


class DayStatus(str, Enum):
    """Calendar color of a day."""

    NO_DATA = "no_data"
    BOTH_MET = "both_met"
    PARTIAL = "partial"
    NONE_MET = "none_met"


@dataclass(frozen=True)
class DayTotal:
    """Summed macros for one date paired with that day's goal snapshot."""

    date: date
    total_calories: float
    total_protein: float
    total_carbs: float
    total_fat: float
    total_fiber: float
    total_sugar: float
    total_sodium: float
    calories_goal: int
    protein_goal: int
    calories_met: bool
    protein_met: bool
    meal_count: int

    @property
    def has_data(self) -> bool:
        return self.meal_count > 0

    @property
    def status(self) -> DayStatus:
        if not self.has_data:
            return DayStatus.NO_DATA
        if self.calories_met and self.protein_met:
            return DayStatus.BOTH_MET
        if self.calories_met or self.protein_met:
            return DayStatus.PARTIAL
        return DayStatus.NONE_MET


@dataclass(frozen=True)
class MonthView:
    """Every calendar day of one month in ascending order."""

    year: int
    month: int
    days: list[DayTotal]


@dataclass(frozen=True)
class WeeklyStats:
    """Deficit averages over a 7-day window.

    ``weekly_weight_change`` is in pounds; negative means loss.
    """

    average_daily_deficit: float
    days_with_data: int
    weekly_weight_change: float
    start_date: date | None = None
    end_date: date | None = None

    @property
    def trend(self) -> str:
        if self.weekly_weight_change < 0:
            return "loss"
        if self.weekly_weight_change > 0:
            return "gain"
        return "no_change"


@dataclass(frozen=True)
class PeriodSummary:
    """Totals across a range of days."""

    start_date: date
    end_date: date
    total_calories: float
    total_protein: float
    calories_goal: int
    protein_goal: int
    days_met_calories: int
    days_met_protein: int
    days_with_data: int


@dataclass(frozen=True)
class GoalProgress:
    """Remaining amounts and progress bar percentages for one day."""

    calories_remaining: float
    protein_remaining: float
    calories_percent: float
    protein_percent: float
    over_calorie_goal: bool


@dataclass(frozen=True)
class WeightProjection:
    """Estimated time to reach the target weight at the current pace."""

    weight_difference: float
    average_daily_deficit: float
    days_to_target: float
    weeks_to_target: float
