"""Services for the shared and per-user food catalog."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol
from uuid import UUID

from calorie_tracker.domain.errors import InvalidInputError
from calorie_tracker.domain.foods import Food, FoodDraft
from calorie_tracker.domain.nutrition import ZERO

MAX_NAME_LENGTH = 255
MAX_CALORIES_PER_100G = Decimal("10000")
MAX_MACRO_PER_100G = Decimal("1000")


class FoodRepository(Protocol):
    """Persistence interface for foods."""

    def list_visible(self, user_id: UUID) -> list[Food]:
        """Return global foods and the user's own foods, ordered by name."""

    def get_visible(self, user_id: UUID, food_id: UUID) -> Food | None:
        """Return a food if it is global or owned by the user."""

    def create_food(self, user_id: UUID, draft: FoodDraft) -> Food:
        """Create a food owned by the user."""

    def update_food(
        self, user_id: UUID, food_id: UUID, draft: FoodDraft
    ) -> Food | None:
        """Replace the name and profile of a food owned by the user."""

    def delete_food(self, user_id: UUID, food_id: UUID) -> bool:
        """Delete a food owned by the user, returning False when nothing matched."""


@dataclass
class FoodCatalogService:
    """Application service for food catalog operations."""

    repository: FoodRepository

    def list_foods(self, user_id: UUID) -> list[Food]:
        """Return the foods the user can log."""
        return self.repository.list_visible(user_id)

    def get_food(self, user_id: UUID, food_id: UUID) -> Food | None:
        """Return a visible food, if present."""
        return self.repository.get_visible(user_id, food_id)

    def create_food(self, user_id: UUID, draft: FoodDraft) -> Food:
        """Validate and create a user-owned food."""
        return self.repository.create_food(user_id, _validate_draft(draft))

    def update_food(
        self, user_id: UUID, food_id: UUID, draft: FoodDraft
    ) -> Food | None:
        """Update an owned food; global and foreign foods read as missing."""
        return self.repository.update_food(user_id, food_id, _validate_draft(draft))

    def delete_food(self, user_id: UUID, food_id: UUID) -> bool:
        """Delete an owned food."""
        return self.repository.delete_food(user_id, food_id)


def _validate_draft(draft: FoodDraft) -> FoodDraft:
    name = draft.name.strip()
    if not name:
        raise InvalidInputError("Food name is required")
    if len(name) > MAX_NAME_LENGTH:
        raise InvalidInputError("Food name must be at most 255 characters")
    profile = draft.per_100g
    if not ZERO <= profile.calories <= MAX_CALORIES_PER_100G:
        raise InvalidInputError("Calories per 100g must be between 0 and 10000")
    for label, value in (
        ("Protein", profile.protein),
        ("Carbs", profile.carbs),
        ("Fat", profile.fat),
    ):
        if not ZERO <= value <= MAX_MACRO_PER_100G:
            raise InvalidInputError(f"{label} per 100g must be between 0 and 1000")
    return FoodDraft(name=name, per_100g=profile)
