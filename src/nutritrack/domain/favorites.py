"""Domain model for favorite meals."""

from dataclasses import dataclass
from datetime import datetime

from nutritrack.domain.meals import MealEntry


@dataclass(frozen=True)
class FavoriteMeal:
    """A logged meal the user marked as a favorite."""

    meal: MealEntry
    favorited_at: datetime
