"""Supabase repository for favorite meals."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from calorie_tracker.adapters.supabase_rows import parse_per_100g, parse_timestamp
from calorie_tracker.domain.entries import UNKNOWN_FOOD_NAME
from calorie_tracker.domain.favorites import (
    FavoriteItemRequest,
    FavoriteMeal,
    FavoriteMealItem,
)
from calorie_tracker.services.favorites import FavoriteMealRepository

_MEAL_COLUMNS = (
    "*, favorite_meal_items(id, food_id, grams, position, "
    "foods(name, calories_per_100g, protein_per_100g, carbs_per_100g, fat_per_100g))"
)


@dataclass
class SupabaseFavoriteMealRepository(FavoriteMealRepository):
    """Supabase-backed favorite meals with embedded items and foods."""

    client: Client

    def list_meals(self, user_id: UUID) -> list[FavoriteMeal]:
        """Return the user's meals newest first."""
        response = (
            self.client.table("favorite_meals")
            .select(_MEAL_COLUMNS)
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_meal(row) for row in response.data or []]

    def get_meal(self, user_id: UUID, meal_id: UUID) -> FavoriteMeal | None:
        """Return an owned meal with its items."""
        response = (
            self.client.table("favorite_meals")
            .select(_MEAL_COLUMNS)
            .eq("id", str(meal_id))
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_meal(response.data[0])

    def create_meal(
        self,
        user_id: UUID,
        name: str,
        description: str | None,
        items: list[FavoriteItemRequest],
    ) -> FavoriteMeal:
        """Insert the meal and its ordered items in one database transaction."""
        response = self.client.rpc(
            "create_favorite_meal",
            {
                "p_user_id": str(user_id),
                "p_name": name,
                "p_description": description,
                "p_items": [
                    {
                        "food_id": str(item.food_id),
                        "grams": item.grams,
                        "position": position,
                    }
                    for position, item in enumerate(items)
                ],
            },
        ).execute()
        if not response.data:
            raise RuntimeError("Failed to create favorite meal")
        meal_id = UUID(str(response.data))

        created = self.get_meal(user_id, meal_id)
        if created is None:
            raise RuntimeError("Failed to read back favorite meal")
        return created

    def delete_meal(self, user_id: UUID, meal_id: UUID) -> bool:
        """Delete an owned meal; items go with it via the foreign key."""
        response = (
            self.client.table("favorite_meals")
            .delete()
            .eq("id", str(meal_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        return bool(response.data)


def _parse_meal(row: dict) -> FavoriteMeal:
    item_rows = sorted(
        row.get("favorite_meal_items") or [], key=lambda item: item.get("position", 0)
    )
    return FavoriteMeal(
        id=UUID(row["id"]),
        user_id=UUID(row["user_id"]),
        name=row["name"],
        description=row.get("description"),
        created_at=parse_timestamp(row["created_at"]),
        items=[_parse_item(item) for item in item_rows],
    )


def _parse_item(row: dict) -> FavoriteMealItem:
    food = row.get("foods") or {}
    return FavoriteMealItem(
        id=UUID(row["id"]),
        food_id=UUID(row["food_id"]),
        food_name=food.get("name") or UNKNOWN_FOOD_NAME,
        grams=int(row["grams"]),
        food_per_100g=parse_per_100g(food),
    )
