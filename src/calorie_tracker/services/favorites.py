"""Favorite meal templates."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Protocol
from uuid import UUID

from calorie_tracker.domain.entries import EntryItem
from calorie_tracker.domain.errors import InvalidInputError
from calorie_tracker.domain.favorites import (
    FavoriteItemRequest,
    FavoriteMeal,
    FavoriteMealItemView,
    FavoriteMealView,
)
from calorie_tracker.domain.nutrition import MacroProfile
from calorie_tracker.services.entries import (
    MAX_ENTRY_GRAMS,
    EntryLedgerService,
    compute_portion,
)
from calorie_tracker.services.foods import FoodRepository


class FavoriteMealRepository(Protocol):
    """Persistence interface for favorite meals and their items."""

    def list_meals(self, user_id: UUID) -> list[FavoriteMeal]:
        """Return the user's meals newest first, items joined with foods."""

    def get_meal(self, user_id: UUID, meal_id: UUID) -> FavoriteMeal | None:
        """Return an owned meal with its items."""

    def create_meal(
        self,
        user_id: UUID,
        name: str,
        description: str | None,
        items: list[FavoriteItemRequest],
    ) -> FavoriteMeal:
        """Persist a meal and its items."""

    def delete_meal(self, user_id: UUID, meal_id: UUID) -> bool:
        """Delete an owned meal and its items."""


@dataclass
class FavoriteMealService:
    """Saves reusable meals and logs them into the entry ledger."""

    repository: FavoriteMealRepository
    food_repository: FoodRepository
    ledger: EntryLedgerService

    def list_meals(self, user_id: UUID) -> list[FavoriteMealView]:
        """Return meals with macros computed from current food profiles."""
        return [build_view(meal) for meal in self.repository.list_meals(user_id)]

    def create_meal(
        self,
        user_id: UUID,
        name: str,
        description: str | None,
        items: list[FavoriteItemRequest],
    ) -> FavoriteMealView:
        """Create a meal; items referencing invisible foods are dropped."""
        cleaned_name = name.strip()
        if not cleaned_name:
            raise InvalidInputError("Meal name is required")
        if not items:
            raise InvalidInputError("At least one food item is required")
        if any(not 0 < item.grams <= MAX_ENTRY_GRAMS for item in items):
            raise InvalidInputError("Grams must be greater than 0 and at most 10000")

        kept = [
            item
            for item in items
            if self.food_repository.get_visible(user_id, item.food_id) is not None
        ]
        cleaned_description = description.strip() if description else None
        meal = self.repository.create_meal(
            user_id, cleaned_name, cleaned_description or None, kept
        )
        return build_view(meal)

    def delete_meal(self, user_id: UUID, meal_id: UUID) -> bool:
        """Delete an owned meal."""
        return self.repository.delete_meal(user_id, meal_id)

    def get_meal_items(
        self, user_id: UUID, meal_id: UUID
    ) -> list[FavoriteItemRequest] | None:
        """Return the (food, grams) pairs of a meal."""
        meal = self.repository.get_meal(user_id, meal_id)
        if meal is None:
            return None
        return [
            FavoriteItemRequest(food_id=item.food_id, grams=item.grams)
            for item in meal.items
        ]

    def log_meal(
        self, user_id: UUID, meal_id: UUID, logged_at: datetime | None = None
    ) -> list[EntryItem] | None:
        """Log every item in one write; the template stays unchanged."""
        items = self.get_meal_items(user_id, meal_id)
        if items is None:
            return None
        return self.ledger.create_entries(
            user_id, [(item.food_id, item.grams) for item in items], logged_at
        )


def build_view(meal: FavoriteMeal) -> FavoriteMealView:
    """Attach per-item macros and meal totals."""
    views = []
    totals = MacroProfile.zero()
    for item in meal.items:
        macros = compute_portion(item.food_per_100g, Decimal(item.grams))
        views.append(FavoriteMealItemView(item=item, macros=macros))
        totals = totals.plus(macros)
    return FavoriteMealView(meal=meal, items=views, totals=totals)
