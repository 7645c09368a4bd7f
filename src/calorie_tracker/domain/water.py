"""Domain models for water tracking."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID


@dataclass(frozen=True)
class WaterEntry:
    """A single water intake record."""

    id: UUID
    user_id: UUID
    day: date
    milliliters: int
    created_at: datetime


@dataclass(frozen=True)
class WaterSummary:
    """Water intake for one day against the user's goal."""

    day: date
    total_ml: int
    goal_ml: int
    percentage_of_goal: Decimal
    entries: list[WaterEntry]
