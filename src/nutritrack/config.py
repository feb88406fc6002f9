"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from nutritrack.domain.goals import DEFAULT_DAILY_CALORIES, DEFAULT_DAILY_PROTEIN
from nutritrack.domain.models import GoalTargets

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    default_daily_calories: int = DEFAULT_DAILY_CALORIES
    default_daily_protein: int = DEFAULT_DAILY_PROTEIN
    month_cache_ttl_seconds: int = 300
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def default_targets(self) -> GoalTargets:
        """Targets used for profiles that never ran the goal calculator."""
        return GoalTargets(
            daily_calories=self.default_daily_calories,
            daily_protein=self.default_daily_protein,
        )
