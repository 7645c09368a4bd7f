"""Domain models for the meal entry ledger."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from calorie_tracker.domain.nutrition import MacroProfile

UNKNOWN_FOOD_NAME = "Unknown"


@dataclass(frozen=True)
class EntryItem:
    """A logged portion of food with its nutrient snapshot."""

    id: UUID
    user_id: UUID
    food_id: UUID | None
    food_name: str
    grams: Decimal
    macros: MacroProfile
    created_at: datetime


@dataclass(frozen=True)
class NewEntry:
    """Snapshot values written when a meal entry is created or edited."""

    food_id: UUID
    grams: Decimal
    macros: MacroProfile
