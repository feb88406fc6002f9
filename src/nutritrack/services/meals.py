"""Meal entry service."""

from dataclasses import dataclass, replace
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID

from nutritrack.domain.meals import MacroTotals, MealEntry, MealType
from nutritrack.services.events import DiaryEvent, DiaryEventBus, DiaryEventKind

_MACRO_FIELDS = ("calories", "protein", "carbs", "fat", "fiber", "sugar", "sodium")


class MealRepository(Protocol):
    """Persistence interface for meal entries."""

    def create_meal(  # noqa: PLR0913
        self,
        user_id: UUID,
        meal_date: date,
        meal_type: MealType,
        description: str,
        macros: MacroTotals,
        created_at: datetime,
    ) -> MealEntry:
        """Create a meal entry and return it."""

    def get_meal(self, meal_id: UUID) -> MealEntry | None:
        """Return a meal entry by id."""

    def update_meal(
        self,
        meal_id: UUID,
        meal_type: MealType,
        description: str,
        macros: MacroTotals,
    ) -> None:
        """Rewrite a meal's type, description and macros."""

    def delete_meal(self, meal_id: UUID) -> None:
        """Delete a meal entry."""

    def list_meals(self, user_id: UUID, start: date, end: date) -> list[MealEntry]:
        """Return meals with ``start <= meal_date <= end``."""


@dataclass
class MealEntryService:
    """Service for logging and editing meals."""

    repository: MealRepository
    events: DiaryEventBus

    def log_meal(
        self,
        user_id: UUID,
        meal_date: date,
        meal_type: MealType,
        description: str,
        macros: dict[str, object] | None = None,
    ) -> MealEntry:
        """Persist a meal. Macros missing from ``macros`` are stored as 0."""
        meal = self.repository.create_meal(
            user_id=user_id,
            meal_date=meal_date,
            meal_type=MealType(meal_type),
            description=description,
            macros=macros_from_mapping(macros),
            created_at=datetime.now(tz=UTC),
        )
        self.events.publish(
            DiaryEvent(user_id, DiaryEventKind.MEAL_LOGGED, meal.meal_date)
        )
        return meal

    def update_meal(
        self,
        user_id: UUID,
        meal_id: UUID,
        *,
        meal_type: MealType | None = None,
        description: str | None = None,
        macros: dict[str, object] | None = None,
    ) -> MealEntry | None:
        """Rewrite a meal's description or macros. The date never changes."""
        meal = self.repository.get_meal(meal_id)
        if meal is None or meal.user_id != user_id:
            return None
        updated = replace(
            meal,
            meal_type=MealType(meal_type) if meal_type else meal.meal_type,
            description=description if description is not None else meal.description,
            macros=_merge_macros(meal.macros, macros),
        )
        self.repository.update_meal(
            meal_id, updated.meal_type, updated.description, updated.macros
        )
        self.events.publish(
            DiaryEvent(user_id, DiaryEventKind.MEAL_UPDATED, meal.meal_date)
        )
        return updated

    def delete_meal(self, user_id: UUID, meal_id: UUID) -> bool:
        """Delete a meal owned by the user."""
        meal = self.repository.get_meal(meal_id)
        if meal is None or meal.user_id != user_id:
            return False
        self.repository.delete_meal(meal_id)
        self.events.publish(
            DiaryEvent(user_id, DiaryEventKind.MEAL_DELETED, meal.meal_date)
        )
        return True

    def list_for_date(self, user_id: UUID, meal_date: date) -> list[MealEntry]:
        return self.repository.list_meals(user_id, meal_date, meal_date)

    def list_range(self, user_id: UUID, start: date, end: date) -> list[MealEntry]:
        return self.repository.list_meals(user_id, start, end)


def macros_from_mapping(values: dict[str, object] | None) -> MacroTotals:
    """Build macros from loose input, treating missing or empty values as 0.

    Raises ``ValueError`` for non-numeric or negative values.
    """
    values = values or {}
    return MacroTotals(
        **{name: _to_float(name, values.get(name)) for name in _MACRO_FIELDS}
    )


def _merge_macros(
    current: MacroTotals, values: dict[str, object] | None
) -> MacroTotals:
    if not values:
        return current
    changes = {
        name: _to_float(name, values[name]) for name in _MACRO_FIELDS if name in values
    }
    return replace(current, **changes)


def _to_float(name: str, value: object) -> float:
    if value is None or value == "":
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be a number, got {value!r}") from exc
    if number < 0:
        raise ValueError(f"{name} must not be negative")
    return number
