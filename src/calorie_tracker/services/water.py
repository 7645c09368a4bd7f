"""Water intake tracking."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Protocol
from uuid import UUID

from calorie_tracker.domain.errors import InvalidInputError, NotFoundError
from calorie_tracker.domain.water import WaterEntry, WaterSummary
from calorie_tracker.services.users import UserRepository

_TENTHS = Decimal("0.1")


class WaterRepository(Protocol):
    """Persistence interface for water entries."""

    def list_for_day(self, user_id: UUID, day: date) -> list[WaterEntry]:
        """Return the day's entries ordered by creation time."""

    def create_entry(
        self, user_id: UUID, day: date, milliliters: int, created_at: datetime
    ) -> WaterEntry:
        """Persist a water entry."""

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> bool:
        """Delete an owned entry, returning False when nothing matched."""


@dataclass
class WaterService:
    """Logs water and reports progress against the daily goal."""

    repository: WaterRepository
    user_repository: UserRepository

    def summary(self, user_id: UUID, day: date) -> WaterSummary:
        """Return the day's entries, total and percentage of goal."""
        user = self.user_repository.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        goal_ml = user.water_goal_ml
        entries = self.repository.list_for_day(user_id, day)
        total_ml = sum(entry.milliliters for entry in entries)
        return WaterSummary(
            day=day,
            total_ml=total_ml,
            goal_ml=goal_ml,
            percentage_of_goal=percentage_of_goal(total_ml, goal_ml),
            entries=entries,
        )

    def log(self, user_id: UUID, milliliters: int, day: date | None = None) -> WaterEntry:
        """Record water for a day, defaulting to today in UTC."""
        if milliliters <= 0:
            raise InvalidInputError("Milliliters must be greater than 0")
        now = datetime.now(tz=UTC)
        return self.repository.create_entry(user_id, day or now.date(), milliliters, now)

    def delete(self, user_id: UUID, entry_id: UUID) -> None:
        """Remove an entry or raise NotFoundError."""
        if not self.repository.delete_entry(user_id, entry_id):
            raise NotFoundError("Water entry not found")


def percentage_of_goal(total_ml: int, goal_ml: int) -> Decimal:
    """Return total/goal as a percentage with one decimal."""
    if goal_ml <= 0:
        return Decimal("0.0")
    raw = Decimal(total_ml) / Decimal(goal_ml) * 100
    return raw.quantize(_TENTHS, rounding=ROUND_HALF_UP)
