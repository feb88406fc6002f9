"""Supabase repository for meal entries."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from nutritrack.domain.meals import MacroTotals, MealEntry, MealType
from nutritrack.services.meals import MealRepository

MEAL_COLUMNS = (
    "id, user_id, meal_date, meal_type, description, calories, protein, carbs, "
    "fat, fiber, sugar, sodium, created_at"
)


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for the ``meals`` table."""

    client: Client

    def create_meal(  # noqa: PLR0913
        self,
        user_id: UUID,
        meal_date: date,
        meal_type: MealType,
        description: str,
        macros: MacroTotals,
        created_at: datetime,
    ) -> MealEntry:
        """Insert a meal row and return the stored entry."""
        response = (
            self.client.table("meals")
            .insert(
                {
                    "user_id": str(user_id),
                    "meal_date": meal_date.isoformat(),
                    "meal_type": meal_type.value,
                    "description": description,
                    **_macro_payload(macros),
                    "created_at": created_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal")
        return parse_meal_row(response.data[0])

    def get_meal(self, meal_id: UUID) -> MealEntry | None:
        """Return a meal by id."""
        response = (
            self.client.table("meals")
            .select(MEAL_COLUMNS)
            .eq("id", str(meal_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_meal_row(response.data[0])

    def update_meal(
        self,
        meal_id: UUID,
        meal_type: MealType,
        description: str,
        macros: MacroTotals,
    ) -> None:
        """Rewrite the editable columns of a meal."""
        self.client.table("meals").update(
            {
                "meal_type": meal_type.value,
                "description": description,
                **_macro_payload(macros),
            }
        ).eq("id", str(meal_id)).execute()

    def delete_meal(self, meal_id: UUID) -> None:
        """Delete a meal row."""
        self.client.table("meals").delete().eq("id", str(meal_id)).execute()

    def list_meals(self, user_id: UUID, start: date, end: date) -> list[MealEntry]:
        """Return meals in the inclusive date range."""
        response = (
            self.client.table("meals")
            .select(MEAL_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("meal_date", start.isoformat())
            .lte("meal_date", end.isoformat())
            .order("meal_date", desc=False)
            .execute()
        )
        return [parse_meal_row(row) for row in response.data or []]


def _macro_payload(macros: MacroTotals) -> dict[str, float]:
    return {
        "calories": macros.calories,
        "protein": macros.protein,
        "carbs": macros.carbs,
        "fat": macros.fat,
        "fiber": macros.fiber,
        "sugar": macros.sugar,
        "sodium": macros.sodium,
    }


def parse_meal_row(row: dict[str, object]) -> MealEntry:
    created_raw = row.get("created_at")
    created_at = (
        datetime.fromisoformat(created_raw)
        if isinstance(created_raw, str) and created_raw
        else datetime.min
    )
    return MealEntry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        meal_date=date.fromisoformat(str(row["meal_date"])[:10]),
        meal_type=MealType(row.get("meal_type") or MealType.SNACK.value),
        description=str(row.get("description") or ""),
        macros=MacroTotals(
            calories=float(row.get("calories") or 0.0),
            protein=float(row.get("protein") or 0.0),
            carbs=float(row.get("carbs") or 0.0),
            fat=float(row.get("fat") or 0.0),
            fiber=float(row.get("fiber") or 0.0),
            sugar=float(row.get("sugar") or 0.0),
            sodium=float(row.get("sodium") or 0.0),
        ),
        created_at=created_at,
    )
