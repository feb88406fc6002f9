"""Favorite meals."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from nutritrack.domain.favorites import FavoriteMeal
from nutritrack.services.meals import MealRepository

_logger = logging.getLogger(__name__)


class FavoriteExistsError(ValueError):
    """The meal is already in the user's favorites."""


class FavoriteRepository(Protocol):
    """Persistence interface for favorite meals."""

    def list_favorites(self, user_id: UUID) -> list[FavoriteMeal]:
        """Return favorites, most recently added first."""

    def is_favorite(self, user_id: UUID, meal_id: UUID) -> bool:
        """Return whether the meal is in the user's favorites."""

    def add_favorite(
        self, user_id: UUID, meal_id: UUID, created_at: datetime
    ) -> None:
        """Store a favorite."""

    def remove_favorite(self, user_id: UUID, meal_id: UUID) -> bool:
        """Remove a favorite; return False when there was none."""


@dataclass
class FavoritesService:
    """Lists, adds and removes a user's favorite meals."""

    repository: FavoriteRepository
    meal_repository: MealRepository

    def list_favorites(self, user_id: UUID) -> list[FavoriteMeal]:
        return self.repository.list_favorites(user_id)

    def add_favorite(self, user_id: UUID, meal_id: UUID) -> bool:
        """Favorite one of the user's meals.

        Returns False when the meal does not exist or belongs to someone else.
        Raises ``FavoriteExistsError`` when it is already a favorite.
        """
        meal = self.meal_repository.get_meal(meal_id)
        if meal is None or meal.user_id != user_id:
            return False
        if self.repository.is_favorite(user_id, meal_id):
            raise FavoriteExistsError("Meal already in favorites")
        self.repository.add_favorite(user_id, meal_id, datetime.now(tz=UTC))
        _logger.info("User %s favorited meal %s", user_id, meal_id)
        return True

    def remove_favorite(self, user_id: UUID, meal_id: UUID) -> bool:
        return self.repository.remove_favorite(user_id, meal_id)
