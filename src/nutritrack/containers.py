"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from nutritrack.adapters.supabase_favorite_repository import (
    SupabaseFavoriteRepository,
)
from nutritrack.adapters.supabase_meal_repository import SupabaseMealRepository
from nutritrack.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from nutritrack.config import Settings
from nutritrack.services.cache import InMemoryCache
from nutritrack.services.diary import DiaryService
from nutritrack.services.events import DiaryEventBus
from nutritrack.services.favorites import FavoritesService
from nutritrack.services.meals import MealEntryService
from nutritrack.services.profiles import ProfileService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    events: DiaryEventBus
    meal_service: MealEntryService
    profile_service: ProfileService
    diary_service: DiaryService
    favorite_service: FavoritesService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    meal_repository = SupabaseMealRepository(supabase_client)
    profile_repository = SupabaseProfileRepository(supabase_client)
    events = DiaryEventBus()
    meal_service = MealEntryService(meal_repository, events)
    profile_service = ProfileService(
        profile_repository, events, defaults=resolved_settings.default_targets
    )
    diary_service = DiaryService(
        meal_repository=meal_repository,
        profile_service=profile_service,
        cache=InMemoryCache(),
        events=events,
        month_ttl_seconds=resolved_settings.month_cache_ttl_seconds,
    )
    favorite_service = FavoritesService(
        SupabaseFavoriteRepository(supabase_client), meal_repository
    )
    return AppContainer(
        settings=resolved_settings,
        events=events,
        meal_service=meal_service,
        profile_service=profile_service,
        diary_service=diary_service,
        favorite_service=favorite_service,
    )
