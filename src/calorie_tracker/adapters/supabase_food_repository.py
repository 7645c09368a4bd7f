"""Supabase implementation for the food catalog."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from calorie_tracker.adapters.supabase_rows import (
    decimal_value,
    parse_per_100g,
    parse_timestamp,
)
from calorie_tracker.domain.foods import Food, FoodDraft
from calorie_tracker.services.foods import FoodRepository


@dataclass
class SupabaseFoodRepository(FoodRepository):
    """Supabase-backed repository for global and user foods."""

    client: Client

    def list_visible(self, user_id: UUID) -> list[Food]:
        """Return global foods and the user's foods ordered by name."""
        response = (
            self.client.table("foods")
            .select("*")
            .or_(_visible_filter(user_id))
            .order("name")
            .execute()
        )
        return [_parse_food(row) for row in response.data or []]

    def get_visible(self, user_id: UUID, food_id: UUID) -> Food | None:
        """Return a food if it is global or owned by the user."""
        response = (
            self.client.table("foods")
            .select("*")
            .eq("id", str(food_id))
            .or_(_visible_filter(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def create_food(self, user_id: UUID, draft: FoodDraft) -> Food:
        """Create a user-owned food row."""
        response = (
            self.client.table("foods")
            .insert({"user_id": str(user_id), **_draft_payload(draft)})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create food")
        return _parse_food(response.data[0])

    def update_food(
        self, user_id: UUID, food_id: UUID, draft: FoodDraft
    ) -> Food | None:
        """Replace an owned food; global foods never match the owner filter."""
        response = (
            self.client.table("foods")
            .update(_draft_payload(draft))
            .eq("id", str(food_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def delete_food(self, user_id: UUID, food_id: UUID) -> bool:
        """Delete an owned food; entry rows keep their snapshot with a null food_id."""
        response = (
            self.client.table("foods")
            .delete()
            .eq("id", str(food_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        return bool(response.data)


def _visible_filter(user_id: UUID) -> str:
    return f"user_id.is.null,user_id.eq.{user_id}"


def _draft_payload(draft: FoodDraft) -> dict[str, object]:
    return {
        "name": draft.name,
        "calories_per_100g": decimal_value(draft.per_100g.calories),
        "protein_per_100g": decimal_value(draft.per_100g.protein),
        "carbs_per_100g": decimal_value(draft.per_100g.carbs),
        "fat_per_100g": decimal_value(draft.per_100g.fat),
    }


def _parse_food(row: dict) -> Food:
    owner = row.get("user_id")
    return Food(
        id=UUID(row["id"]),
        user_id=UUID(owner) if owner else None,
        name=row["name"],
        per_100g=parse_per_100g(row),
        created_at=parse_timestamp(row["created_at"]),
    )
