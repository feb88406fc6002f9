"""Diary reads: day, month, week, streak and projection views for a user."""

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from uuid import UUID

from nutritrack.domain.diary import (
    DayTotal,
    GoalProgress,
    MonthView,
    WeeklyStats,
    WeightProjection,
)
from nutritrack.services import adherence
from nutritrack.services.cache import Cache
from nutritrack.services.events import DiaryEvent, DiaryEventBus
from nutritrack.services.meals import MealRepository
from nutritrack.services.profiles import ProfileService

_logger = logging.getLogger(__name__)

JANUARY = 1
DECEMBER = 12


@dataclass
class DiaryService:
    """Fetches meals and targets and runs them through the aggregator.

    Month views are cached per user and dropped whenever the event bus
    reports a change for that user.
    """

    meal_repository: MealRepository
    profile_service: ProfileService
    cache: Cache
    events: DiaryEventBus
    month_ttl_seconds: int = 300

    def __post_init__(self) -> None:
        self.events.subscribe(self._invalidate)

    def get_day(self, user_id: UUID, day: date) -> DayTotal:
        """Return totals and goal flags for one date."""
        goals = self.profile_service.get_targets(user_id)
        meals = self.meal_repository.list_meals(user_id, day, day)
        return adherence.aggregate_day(day, meals, goals)

    def get_month(self, user_id: UUID, year: int, month: int) -> MonthView:
        """Return the calendar view for a month."""
        cache_key = _month_key(user_id, year, month)
        cached = self.cache.get(cache_key)
        if isinstance(cached, MonthView):
            return cached

        start, end = _month_bounds(year, month)
        goals = self.profile_service.get_targets(user_id)
        meals = self.meal_repository.list_meals(user_id, start, end)
        view = adherence.aggregate_month(year, month, meals, goals)
        self.cache.set(cache_key, view, ttl_seconds=self.month_ttl_seconds)
        return view

    def get_weekly_stats(self, user_id: UUID, end: date) -> WeeklyStats:
        """Deficit stats for the 7 days ending on ``end``."""
        start = end - timedelta(days=adherence.WEEK_DAYS - 1)
        goals = self.profile_service.get_targets(user_id)
        meals = self.meal_repository.list_meals(user_id, start, end)
        return adherence.compute_weekly_stats(
            meals, goals.daily_calories, start_date=start, end_date=end
        )

    def get_range(self, user_id: UUID, start: date, end: date) -> list[DayTotal]:
        """One DayTotal per date from ``start`` to ``end`` inclusive."""
        if end < start:
            raise ValueError("end must not be before start")
        goals = self.profile_service.get_targets(user_id)
        meals = self.meal_repository.list_meals(user_id, start, end)
        return adherence.aggregate_range(start, end, meals, goals)

    def get_streak(self, user_id: UUID, today: date) -> int:
        """Current streak, loading earlier months while the chain reaches back.

        Starts with this month and the previous one and prepends another month
        each time the streak runs into the first loaded day.
        """
        year, month = _previous_month(today.year, today.month)
        days = (
            self.get_month(user_id, year, month).days
            + self.get_month(user_id, today.year, today.month).days
        )
        while True:
            streak = adherence.compute_streak(days, today)
            if not _streak_reaches(days, today, streak):
                return streak
            year, month = _previous_month(year, month)
            days = self.get_month(user_id, year, month).days + days

    def get_progress(self, user_id: UUID, day: date) -> GoalProgress:
        return adherence.compute_goal_progress(self.get_day(user_id, day))

    def get_projection(self, user_id: UUID, end: date) -> WeightProjection | None:
        """Time to target weight at the pace of the last 7 days."""
        profile = self.profile_service.get_profile(user_id)
        if profile is None:
            return None
        stats = self.get_weekly_stats(user_id, end)
        return adherence.project_time_to_target(
            profile.weight, profile.target_weight, stats.average_daily_deficit
        )

    def _invalidate(self, event: DiaryEvent) -> None:
        if event.meal_date is None:
            prefix = _user_prefix(event.user_id)
        else:
            prefix = _month_key(
                event.user_id, event.meal_date.year, event.meal_date.month
            )
        removed = self.cache.delete_prefix(prefix)
        _logger.debug("Invalidated %s cached month views for %s", removed, prefix)


def _user_prefix(user_id: UUID) -> str:
    return f"diary:month:{user_id}:"


def _month_key(user_id: UUID, year: int, month: int) -> str:
    return f"{_user_prefix(user_id)}{year:04d}-{month:02d}"


def _month_bounds(year: int, month: int) -> tuple[date, date]:
    start = date(year, month, 1)
    if month == DECEMBER:
        end = date(year + 1, JANUARY, 1)
    else:
        end = date(year, month + 1, 1)
    return start, end - timedelta(days=1)


def _streak_reaches(days: list[DayTotal], today: date, streak: int) -> bool:
    """Whether a streak ending on the latest logged day starts at ``days[0]``."""
    if streak == 0:
        return False
    latest = max(day.date for day in days if day.has_data and day.date <= today)
    return latest - timedelta(days=streak - 1) == days[0].date


def _previous_month(year: int, month: int) -> tuple[int, int]:
    if month == JANUARY:
        return year - 1, DECEMBER
    return year, month - 1
