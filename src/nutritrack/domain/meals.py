"""Domain models for logged meals."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from uuid import UUID


class MealType(str, Enum):
    """Slot of the day a meal was eaten in."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


@dataclass(frozen=True)
class MacroTotals:
    """Macro values for a meal or a sum of meals."""

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    fiber: float = 0.0
    sugar: float = 0.0
    sodium: float = 0.0

    def __add__(self, other: "MacroTotals") -> "MacroTotals":
        return MacroTotals(
            calories=self.calories + other.calories,
            protein=self.protein + other.protein,
            carbs=self.carbs + other.carbs,
            fat=self.fat + other.fat,
            fiber=self.fiber + other.fiber,
            sugar=self.sugar + other.sugar,
            sodium=self.sodium + other.sodium,
        )


@dataclass(frozen=True)
class MealEntry:
    """One logged meal belonging to a single user and calendar date."""

    id: UUID
    user_id: UUID
    meal_date: date
    meal_type: MealType
    description: str
    macros: MacroTotals
    created_at: datetime

    @property
    def calories(self) -> float:
        return self.macros.calories

    @property
    def protein(self) -> float:
        return self.macros.protein
