"""Domain models for user profiles and goal targets."""

from dataclasses import dataclass
from enum import Enum


class Gender(str, Enum):
    """Biological sex used by the Harris-Benedict equation."""

    MALE = "male"
    FEMALE = "female"


class ActivityLevel(str, Enum):
    """Self-reported activity level."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"


@dataclass(frozen=True)
class GoalTargets:
    """Daily calorie ceiling and protein floor."""

    daily_calories: int
    daily_protein: int


@dataclass(frozen=True)
class Profile:
    """Biometric and goal state for one user (pounds and inches).

    ``gender`` and ``activity_level`` are None until the user provides them.
    """

    weight: float
    target_weight: float
    height: float
    age: int
    gender: Gender | None
    activity_level: ActivityLevel | None
    daily_calories: int | None = None
    daily_protein: int | None = None
