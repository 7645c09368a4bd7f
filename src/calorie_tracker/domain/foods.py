"""Domain models for the food catalog."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from calorie_tracker.domain.nutrition import MacroProfile


@dataclass(frozen=True)
class Food:
    """A food with its nutrient profile per 100 g."""

    id: UUID
    user_id: UUID | None
    name: str
    per_100g: MacroProfile
    created_at: datetime

    @property
    def is_global(self) -> bool:
        """Return True for shared foods that no user owns."""
        return self.user_id is None


@dataclass(frozen=True)
class FoodDraft:
    """User-supplied fields for creating or replacing a food."""

    name: str
    per_100g: MacroProfile
