"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from uuid import UUID, uuid4

import pytest

from nutritrack.config import Settings
from nutritrack.containers import AppContainer
from nutritrack.domain.favorites import FavoriteMeal
from nutritrack.domain.meals import MacroTotals, MealEntry, MealType
from nutritrack.domain.models import ActivityLevel, Gender, GoalTargets, Profile
from nutritrack.services.cache import InMemoryCache
from nutritrack.services.diary import DiaryService
from nutritrack.services.events import DiaryEventBus
from nutritrack.services.favorites import FavoriteRepository, FavoritesService
from nutritrack.services.meals import MealEntryService, MealRepository
from nutritrack.services.profiles import ProfileRepository, ProfileService


@dataclass
class InMemoryMealRepository(MealRepository):
    """In-memory meal repository for tests."""

    meals: dict[UUID, MealEntry] = field(default_factory=dict)
    list_calls: int = 0

    def create_meal(  # noqa: PLR0913
        self,
        user_id: UUID,
        meal_date: date,
        meal_type: MealType,
        description: str,
        macros: MacroTotals,
        created_at: datetime,
    ) -> MealEntry:
        meal = MealEntry(
            id=uuid4(),
            user_id=user_id,
            meal_date=meal_date,
            meal_type=meal_type,
            description=description,
            macros=macros,
            created_at=created_at,
        )
        self.meals[meal.id] = meal
        return meal

    def get_meal(self, meal_id: UUID) -> MealEntry | None:
        return self.meals.get(meal_id)

    def update_meal(
        self,
        meal_id: UUID,
        meal_type: MealType,
        description: str,
        macros: MacroTotals,
    ) -> None:
        self.meals[meal_id] = replace(
            self.meals[meal_id],
            meal_type=meal_type,
            description=description,
            macros=macros,
        )

    def delete_meal(self, meal_id: UUID) -> None:
        self.meals.pop(meal_id, None)

    def list_meals(self, user_id: UUID, start: date, end: date) -> list[MealEntry]:
        self.list_calls += 1
        return sorted(
            (
                meal
                for meal in self.meals.values()
                if meal.user_id == user_id and start <= meal.meal_date <= end
            ),
            key=lambda meal: meal.meal_date,
        )


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[UUID, Profile] = field(default_factory=dict)

    def get_profile(self, user_id: UUID) -> Profile | None:
        return self.profiles.get(user_id)

    def update_targets(self, user_id: UUID, targets: GoalTargets) -> None:
        self.profiles[user_id] = replace(
            self.profiles[user_id],
            daily_calories=targets.daily_calories,
            daily_protein=targets.daily_protein,
        )


@dataclass
class InMemoryFavoriteRepository(FavoriteRepository):
    """In-memory favorites joined against an in-memory meal repository."""

    meal_repository: InMemoryMealRepository
    favorites: dict[tuple[UUID, UUID], datetime] = field(default_factory=dict)

    def list_favorites(self, user_id: UUID) -> list[FavoriteMeal]:
        found = [
            FavoriteMeal(meal=self.meal_repository.meals[meal_id], favorited_at=at)
            for (owner, meal_id), at in self.favorites.items()
            if owner == user_id and meal_id in self.meal_repository.meals
        ]
        return sorted(found, key=lambda item: item.favorited_at, reverse=True)

    def is_favorite(self, user_id: UUID, meal_id: UUID) -> bool:
        return (user_id, meal_id) in self.favorites

    def add_favorite(
        self, user_id: UUID, meal_id: UUID, created_at: datetime
    ) -> None:
        self.favorites[(user_id, meal_id)] = created_at

    def remove_favorite(self, user_id: UUID, meal_id: UUID) -> bool:
        return self.favorites.pop((user_id, meal_id), None) is not None


def make_meal(  # noqa: PLR0913
    meal_date: date,
    calories: float = 0,
    protein: float = 0,
    user_id: UUID | None = None,
    meal_type: MealType = MealType.LUNCH,
    **macros: float,
) -> MealEntry:
    return MealEntry(
        id=uuid4(),
        user_id=user_id or uuid4(),
        meal_date=meal_date,
        meal_type=meal_type,
        description="test meal",
        macros=MacroTotals(calories=calories, protein=protein, **macros),
        created_at=datetime(meal_date.year, meal_date.month, meal_date.day, 12),
    )


def make_profile(**overrides: object) -> Profile:
    values: dict[str, object] = {
        "weight": 200,
        "target_weight": 180,
        "height": 70,
        "age": 30,
        "gender": Gender.MALE,
        "activity_level": ActivityLevel.MODERATE,
        "daily_calories": 2000,
        "daily_protein": 150,
    }
    values.update(overrides)
    return Profile(**values)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
    )


@pytest.fixture
def events() -> DiaryEventBus:
    return DiaryEventBus()


@pytest.fixture
def meal_repository() -> InMemoryMealRepository:
    return InMemoryMealRepository()


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def container(
    settings: Settings,
    events: DiaryEventBus,
    meal_repository: InMemoryMealRepository,
    profile_repository: InMemoryProfileRepository,
) -> AppContainer:
    profile_service = ProfileService(
        profile_repository, events, defaults=settings.default_targets
    )
    return AppContainer(
        settings=settings,
        events=events,
        meal_service=MealEntryService(meal_repository, events),
        profile_service=profile_service,
        diary_service=DiaryService(
            meal_repository=meal_repository,
            profile_service=profile_service,
            cache=InMemoryCache(),
            events=events,
        ),
        favorite_service=FavoritesService(
            InMemoryFavoriteRepository(meal_repository), meal_repository
        ),
    )
