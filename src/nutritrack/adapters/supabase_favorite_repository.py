"""Supabase repository for favorite meals."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from nutritrack.adapters.supabase_meal_repository import MEAL_COLUMNS, parse_meal_row
from nutritrack.domain.favorites import FavoriteMeal
from nutritrack.services.favorites import FavoriteRepository


@dataclass
class SupabaseFavoriteRepository(FavoriteRepository):
    """Supabase implementation for the ``favorites`` table.

    Meals are embedded through the ``meal_id`` foreign key.
    """

    client: Client

    def list_favorites(self, user_id: UUID) -> list[FavoriteMeal]:
        """Return favorites with their meals, newest first."""
        response = (
            self.client.table("favorites")
            .select(f"created_at, meals({MEAL_COLUMNS})")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .execute()
        )
        favorites = []
        for row in response.data or []:
            meal_row = row.get("meals")
            if not meal_row:
                continue
            favorites.append(
                FavoriteMeal(
                    meal=parse_meal_row(meal_row),
                    favorited_at=datetime.fromisoformat(str(row["created_at"])),
                )
            )
        return favorites

    def is_favorite(self, user_id: UUID, meal_id: UUID) -> bool:
        response = (
            self.client.table("favorites")
            .select("id")
            .eq("user_id", str(user_id))
            .eq("meal_id", str(meal_id))
            .limit(1)
            .execute()
        )
        return bool(response.data)

    def add_favorite(
        self, user_id: UUID, meal_id: UUID, created_at: datetime
    ) -> None:
        """Insert a favorite row."""
        response = (
            self.client.table("favorites")
            .insert(
                {
                    "user_id": str(user_id),
                    "meal_id": str(meal_id),
                    "created_at": created_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to add favorite")

    def remove_favorite(self, user_id: UUID, meal_id: UUID) -> bool:
        """Delete a favorite row; deleted rows are returned by Supabase."""
        response = (
            self.client.table("favorites")
            .delete()
            .eq("user_id", str(user_id))
            .eq("meal_id", str(meal_id))
            .execute()
        )
        return bool(response.data)
