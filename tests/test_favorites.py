"""Tests for the favorites service."""

from datetime import date
from uuid import uuid4

import pytest

from nutritrack.domain.meals import MealType
from nutritrack.services.events import DiaryEventBus
from nutritrack.services.favorites import FavoriteExistsError, FavoritesService
from nutritrack.services.meals import MealEntryService
from tests.conftest import InMemoryFavoriteRepository, InMemoryMealRepository


def _services() -> tuple[FavoritesService, MealEntryService]:
    meals = InMemoryMealRepository()
    favorites = FavoritesService(InMemoryFavoriteRepository(meals), meals)
    return favorites, MealEntryService(meals, DiaryEventBus())


def test_add_and_list_favorites_newest_first() -> None:
    favorites, meal_service = _services()
    user_id = uuid4()
    oats = meal_service.log_meal(user_id, date(2024, 5, 1), MealType.BREAKFAST, "oats")
    tacos = meal_service.log_meal(user_id, date(2024, 5, 2), MealType.DINNER, "tacos")

    assert favorites.add_favorite(user_id, oats.id) is True
    assert favorites.add_favorite(user_id, tacos.id) is True

    listed = favorites.list_favorites(user_id)
    assert [item.meal.description for item in listed] == ["tacos", "oats"]
    assert favorites.list_favorites(uuid4()) == []


def test_add_favorite_rejects_duplicates() -> None:
    favorites, meal_service = _services()
    user_id = uuid4()
    meal = meal_service.log_meal(user_id, date(2024, 5, 1), MealType.LUNCH, "soup")
    favorites.add_favorite(user_id, meal.id)

    with pytest.raises(FavoriteExistsError):
        favorites.add_favorite(user_id, meal.id)


def test_add_favorite_requires_own_existing_meal() -> None:
    favorites, meal_service = _services()
    owner = uuid4()
    meal = meal_service.log_meal(owner, date(2024, 5, 1), MealType.LUNCH, "soup")

    assert favorites.add_favorite(uuid4(), meal.id) is False
    assert favorites.add_favorite(owner, uuid4()) is False
    assert favorites.list_favorites(owner) == []


def test_remove_favorite() -> None:
    favorites, meal_service = _services()
    user_id = uuid4()
    meal = meal_service.log_meal(user_id, date(2024, 5, 1), MealType.SNACK, "apple")
    favorites.add_favorite(user_id, meal.id)

    assert favorites.remove_favorite(user_id, meal.id) is True
    assert favorites.remove_favorite(user_id, meal.id) is False
    assert favorites.list_favorites(user_id) == []


def test_deleted_meal_drops_out_of_favorites() -> None:
    favorites, meal_service = _services()
    user_id = uuid4()
    meal = meal_service.log_meal(user_id, date(2024, 5, 1), MealType.SNACK, "apple")
    favorites.add_favorite(user_id, meal.id)

    meal_service.delete_meal(user_id, meal.id)

    assert favorites.list_favorites(user_id) == []
