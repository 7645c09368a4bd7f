"""Domain models for favorite meal templates."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from calorie_tracker.domain.nutrition import MacroProfile


@dataclass(frozen=True)
class FavoriteItemRequest:
    """A (food, grams) pair inside a favorite meal."""

    food_id: UUID
    grams: int


@dataclass(frozen=True)
class FavoriteMealItem:
    """Stored template item joined with the current food profile."""

    id: UUID
    food_id: UUID
    food_name: str
    grams: int
    food_per_100g: MacroProfile


@dataclass(frozen=True)
class FavoriteMeal:
    """A named meal template owned by a user."""

    id: UUID
    user_id: UUID
    name: str
    description: str | None
    created_at: datetime
    items: list[FavoriteMealItem]


@dataclass(frozen=True)
class FavoriteMealItemView:
    """Template item with macros for its gram amount."""

    item: FavoriteMealItem
    macros: MacroProfile


@dataclass(frozen=True)
class FavoriteMealView:
    """Template with per-item macros and meal totals."""

    meal: FavoriteMeal
    items: list[FavoriteMealItemView]
    totals: MacroProfile
