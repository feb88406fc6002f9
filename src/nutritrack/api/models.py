"""Request and response models for the HTTP API."""

from datetime import date

from pydantic import BaseModel, Field

from nutritrack.domain.meals import MealType
from nutritrack.domain.models import ActivityLevel, Gender


class GoalRequest(BaseModel):
    """Biometric inputs for goal calculation (pounds and inches)."""

    weight: float
    target_weight: float
    height: float
    age: int
    gender: Gender
    activity_level: ActivityLevel
    timeline: str


class RecalculateRequest(BaseModel):
    """Timeline for recalculating stored profile goals."""

    timeline: str | None = None


class TargetsBody(BaseModel):
    """Daily targets."""

    daily_calories: int = Field(ge=0)
    daily_protein: int = Field(ge=0)


class MacroFields(BaseModel):
    """Optional macro values; missing ones are stored as 0."""

    calories: float | None = Field(default=None, ge=0)
    protein: float | None = Field(default=None, ge=0)
    carbs: float | None = Field(default=None, ge=0)
    fat: float | None = Field(default=None, ge=0)
    fiber: float | None = Field(default=None, ge=0)
    sugar: float | None = Field(default=None, ge=0)
    sodium: float | None = Field(default=None, ge=0)


class MealCreate(MacroFields):
    """New meal entry."""

    meal_date: date
    meal_type: MealType
    description: str = ""


class MealUpdate(MacroFields):
    """Editable meal fields. The date cannot be changed."""

    meal_type: MealType | None = None
    description: str | None = None
