"""Supabase repository for user profiles."""

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import TypeVar
from uuid import UUID

from supabase import Client

from nutritrack.domain.models import ActivityLevel, Gender, GoalTargets, Profile
from nutritrack.services.profiles import ProfileRepository

EnumT = TypeVar("EnumT", bound=Enum)


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for the ``user_profiles`` table."""

    client: Client

    def get_profile(self, user_id: UUID) -> Profile | None:
        """Return the stored profile for a user."""
        response = (
            self.client.table("user_profiles")
            .select(
                "weight, target_weight, height, age, gender, activity_level, "
                "daily_calories, daily_protein"
            )
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return Profile(
            weight=float(row.get("weight") or 0.0),
            target_weight=float(row.get("target_weight") or 0.0),
            height=float(row.get("height") or 0.0),
            age=int(row.get("age") or 0),
            gender=_optional_enum(Gender, row.get("gender")),
            activity_level=_optional_enum(ActivityLevel, row.get("activity_level")),
            daily_calories=_optional_int(row.get("daily_calories")),
            daily_protein=_optional_int(row.get("daily_protein")),
        )

    def update_targets(self, user_id: UUID, targets: GoalTargets) -> None:
        """Persist daily targets."""
        self.client.table("user_profiles").update(
            {
                "daily_calories": targets.daily_calories,
                "daily_protein": targets.daily_protein,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).eq("user_id", str(user_id)).execute()


def _optional_int(value: object) -> int | None:
    if value is None:
        return None
    return int(value)


def _optional_enum(enum_type: type[EnumT], value: object) -> EnumT | None:
    if value is None or value == "":
        return None
    return enum_type(value)
