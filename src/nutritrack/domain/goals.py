"""Domain models and constants for goal calculation."""

from dataclasses import dataclass

from nutritrack.domain.models import ActivityLevel, Gender, GoalTargets

DEFAULT_DAILY_CALORIES = 2000
DEFAULT_DAILY_PROTEIN = 150
DEFAULT_GOAL_TARGETS = GoalTargets(
    daily_calories=DEFAULT_DAILY_CALORIES,
    daily_protein=DEFAULT_DAILY_PROTEIN,
)

# Used only when the caller supplies no timeline text at all.
DEFAULT_TIMELINE_DAYS = 56

CALORIES_PER_POUND = 3500
AGGRESSIVE_DEFICIT_KCAL = 1000


@dataclass(frozen=True)
class GoalInput:
    """Biometric inputs (pounds, inches) and the free-text timeline."""

    weight_lb: float
    target_weight_lb: float
    height_in: float
    age: int
    gender: Gender | None
    activity_level: ActivityLevel | None
    timeline_text: str | None = None


@dataclass(frozen=True)
class GoalResult:
    """Derived daily targets.

    ``calculated_deficit`` is negative when losing weight and positive when
    gaining.
    """

    daily_calories: int
    daily_protein: int
    calculated_deficit: int
    timeline_days: int
    maintenance_calories: int
    warning: str | None = None

    @property
    def targets(self) -> GoalTargets:
        return GoalTargets(
            daily_calories=self.daily_calories, daily_protein=self.daily_protein
        )
