"""Adherence aggregation over logged meals.

All functions are pure: callers fetch meals and goal targets and pass them
in. Calories are a ceiling (overshoot fails) and protein is a floor
(undershoot fails).
"""

import calendar
from collections import defaultdict
from collections.abc import Iterable, Sequence
from datetime import date, timedelta

from nutritrack.domain.diary import (
    DayTotal,
    GoalProgress,
    MonthView,
    PeriodSummary,
    WeeklyStats,
    WeightProjection,
)
from nutritrack.domain.goals import CALORIES_PER_POUND
from nutritrack.domain.meals import MacroTotals, MealEntry
from nutritrack.domain.models import GoalTargets

WEEK_DAYS = 7


def aggregate_day(
    day: date, meals: Iterable[MealEntry], goals: GoalTargets
) -> DayTotal:
    """Sum the meals logged on ``day``; meals for other dates are ignored."""
    totals = MacroTotals()
    meal_count = 0
    for meal in meals:
        if meal.meal_date != day:
            continue
        totals = totals + meal.macros
        meal_count += 1

    has_data = meal_count > 0
    return DayTotal(
        date=day,
        total_calories=totals.calories,
        total_protein=totals.protein,
        total_carbs=totals.carbs,
        total_fat=totals.fat,
        total_fiber=totals.fiber,
        total_sugar=totals.sugar,
        total_sodium=totals.sodium,
        calories_goal=goals.daily_calories,
        protein_goal=goals.daily_protein,
        calories_met=has_data and totals.calories <= goals.daily_calories,
        protein_met=has_data and totals.protein >= goals.daily_protein,
        meal_count=meal_count,
    )


def aggregate_range(
    start: date, end: date, meals: Iterable[MealEntry], goals: GoalTargets
) -> list[DayTotal]:
    """One DayTotal per date from ``start`` to ``end`` inclusive."""
    by_date = group_by_date(meals)
    days = []
    current = start
    while current <= end:
        days.append(aggregate_day(current, by_date.get(current, []), goals))
        current += timedelta(days=1)
    return days


def aggregate_month(
    year: int, month: int, meals: Iterable[MealEntry], goals: GoalTargets
) -> MonthView:
    """Every calendar day of the month, including days without meals."""
    last_day = calendar.monthrange(year, month)[1]
    days = aggregate_range(
        date(year, month, 1), date(year, month, last_day), meals, goals
    )
    return MonthView(year=year, month=month, days=days)


def group_by_date(meals: Iterable[MealEntry]) -> dict[date, list[MealEntry]]:
    grouped: dict[date, list[MealEntry]] = defaultdict(list)
    for meal in meals:
        grouped[meal.meal_date].append(meal)
    return dict(grouped)


def compute_weekly_stats(
    meals: Iterable[MealEntry],
    daily_calorie_goal: int,
    start_date: date | None = None,
    end_date: date | None = None,
) -> WeeklyStats:
    """Average daily deficit over the days that have at least one meal.

    Days without meals are left out of the average rather than counted as
    zero. The projected weekly change is negative for a loss.
    """
    daily_calories: dict[date, float] = defaultdict(float)
    for meal in meals:
        daily_calories[meal.meal_date] += meal.calories

    deficits = [daily_calorie_goal - total for total in daily_calories.values()]
    average = sum(deficits) / len(deficits) if deficits else 0.0
    return WeeklyStats(
        average_daily_deficit=average,
        days_with_data=len(deficits),
        weekly_weight_change=project_weekly_weight_change(average),
        start_date=start_date,
        end_date=end_date,
    )


def project_weekly_weight_change(average_daily_deficit: float) -> float:
    """Pounds gained (positive) or lost (negative) per week."""
    if average_daily_deficit == 0:
        return 0.0
    return -(average_daily_deficit * WEEK_DAYS) / CALORIES_PER_POUND


def compute_streak(days: Sequence[DayTotal], today: date) -> int:
    """Count consecutive qualifying days back from the latest logged day.

    A day qualifies when either goal is met. Counting stops at a day with
    no data or with neither goal met.
    """
    by_date = {day.date: day for day in days}
    logged = sorted(
        (day for day in days if day.has_data and day.date <= today),
        key=lambda day: day.date,
        reverse=True,
    )
    if not logged:
        return 0

    streak = 0
    current = logged[0].date
    while True:
        day = by_date.get(current)
        if day is None or not day.has_data:
            break
        if not (day.calories_met or day.protein_met):
            break
        streak += 1
        current -= timedelta(days=1)
    return streak


def compute_remaining(consumed: float, goal: float) -> float:
    return max(0, goal - consumed)


def compute_progress_percent(consumed: float, goal: float) -> float:
    """Progress bar fill, capped at 100 for both ceiling and floor goals."""
    if goal <= 0:
        return 100.0 if consumed > 0 else 0.0
    return min(100.0, consumed / goal * 100)


def compute_goal_progress(day: DayTotal) -> GoalProgress:
    return GoalProgress(
        calories_remaining=compute_remaining(day.total_calories, day.calories_goal),
        protein_remaining=compute_remaining(day.total_protein, day.protein_goal),
        calories_percent=compute_progress_percent(
            day.total_calories, day.calories_goal
        ),
        protein_percent=compute_progress_percent(day.total_protein, day.protein_goal),
        over_calorie_goal=day.total_calories > day.calories_goal,
    )


def summarize_period(days: Sequence[DayTotal]) -> PeriodSummary:
    """Totals, summed goals and goal-met counts for the logged days."""
    if not days:
        raise ValueError("Cannot summarize an empty period")
    logged = [day for day in days if day.has_data]
    return PeriodSummary(
        start_date=min(day.date for day in days),
        end_date=max(day.date for day in days),
        total_calories=sum(day.total_calories for day in logged),
        total_protein=sum(day.total_protein for day in logged),
        calories_goal=sum(day.calories_goal for day in logged),
        protein_goal=sum(day.protein_goal for day in logged),
        days_met_calories=sum(1 for day in logged if day.calories_met),
        days_met_protein=sum(1 for day in logged if day.protein_met),
        days_with_data=len(logged),
    )


def project_time_to_target(
    weight_lb: float, target_weight_lb: float, average_daily_deficit: float
) -> WeightProjection | None:
    """Days and weeks to the target weight, or None without a deficit."""
    if average_daily_deficit == 0:
        return None
    weight_difference = target_weight_lb - weight_lb
    days = abs(abs(weight_difference) * CALORIES_PER_POUND / average_daily_deficit)
    return WeightProjection(
        weight_difference=weight_difference,
        average_daily_deficit=average_daily_deficit,
        days_to_target=days,
        weeks_to_target=days / WEEK_DAYS,
    )
