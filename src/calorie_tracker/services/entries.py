"""Meal entry ledger service."""

from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta
from decimal import Decimal
from typing import Protocol
from uuid import UUID

from calorie_tracker.domain.entries import EntryItem, NewEntry
from calorie_tracker.domain.errors import FoodNotFoundError, InvalidInputError
from calorie_tracker.domain.nutrition import (
    ZERO,
    MacroProfile,
    round_nutrient,
    to_decimal,
)
from calorie_tracker.services.foods import FoodRepository

MAX_ENTRY_GRAMS = Decimal("10000")
_HUNDRED = Decimal("100")


class EntryRepository(Protocol):
    """Persistence interface for meal entries."""

    def list_entries(
        self, user_id: UUID, start: datetime | None, end: datetime | None
    ) -> list[EntryItem]:
        """Return entries in [start, end), newest first."""

    def list_recent(self, user_id: UUID, limit: int) -> list[EntryItem]:
        """Return the most recent entries."""

    def get_entry(self, user_id: UUID, entry_id: UUID) -> EntryItem | None:
        """Return an entry owned by the user."""

    def create_entry(
        self, user_id: UUID, entry: NewEntry, created_at: datetime
    ) -> EntryItem:
        """Persist a new entry and return it."""

    def create_entries(
        self, user_id: UUID, entries: list[NewEntry], created_at: datetime
    ) -> list[EntryItem]:
        """Persist several entries in one write; either all land or none do."""

    def update_entry(
        self, user_id: UUID, entry_id: UUID, entry: NewEntry
    ) -> EntryItem | None:
        """Overwrite food, grams and snapshot of an owned entry."""

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> bool:
        """Delete an owned entry, returning False when nothing matched."""


@dataclass
class EntryLedgerService:
    """Logs, edits and removes meal entries with nutrient snapshots."""

    repository: EntryRepository
    food_repository: FoodRepository

    def list_entries(self, user_id: UUID, day: date | None = None) -> list[EntryItem]:
        """Return all entries for the user, optionally for one UTC day."""
        if day is None:
            return self.repository.list_entries(user_id, None, None)
        start, end = utc_day_window(day, day)
        return self.repository.list_entries(user_id, start, end)

    def get_entry(self, user_id: UUID, entry_id: UUID) -> EntryItem | None:
        """Return one entry or None when absent or foreign."""
        return self.repository.get_entry(user_id, entry_id)

    def create_entry(
        self,
        user_id: UUID,
        food_id: UUID,
        grams: Decimal | int | float,
        logged_at: datetime | None = None,
    ) -> EntryItem:
        """Snapshot the food's nutrients for the portion and persist the entry."""
        entry = self._snapshot(user_id, food_id, _validate_grams(grams))
        return self.repository.create_entry(user_id, entry, _created_at(logged_at))

    def create_entries(
        self,
        user_id: UUID,
        portions: list[tuple[UUID, Decimal | int | float]],
        logged_at: datetime | None = None,
    ) -> list[EntryItem]:
        """Log several portions at once.

        Every portion is validated and its food resolved before anything is
        written, so a bad portion leaves the ledger untouched.
        """
        entries = [
            self._snapshot(user_id, food_id, _validate_grams(grams))
            for food_id, grams in portions
        ]
        if not entries:
            return []
        return self.repository.create_entries(user_id, entries, _created_at(logged_at))

    def update_entry(
        self,
        user_id: UUID,
        entry_id: UUID,
        food_id: UUID,
        grams: Decimal | int | float,
    ) -> EntryItem | None:
        """Recompute the snapshot for a new food and portion."""
        portion_grams = _validate_grams(grams)
        existing = self.repository.get_entry(user_id, entry_id)
        if existing is None:
            return None
        entry = self._snapshot(user_id, food_id, portion_grams)
        return self.repository.update_entry(user_id, entry_id, entry)

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> bool:
        """Delete an entry; False means not found."""
        return self.repository.delete_entry(user_id, entry_id)

    def _snapshot(self, user_id: UUID, food_id: UUID, grams: Decimal) -> NewEntry:
        food = self.food_repository.get_visible(user_id, food_id)
        if food is None:
            raise FoodNotFoundError()
        return NewEntry(
            food_id=food.id,
            grams=grams,
            macros=compute_portion(food.per_100g, grams),
        )


def compute_portion(per_100g: MacroProfile, grams: Decimal) -> MacroProfile:
    """Scale a per-100 g profile to a portion, rounded to cents."""
    return MacroProfile(
        calories=round_nutrient(per_100g.calories * grams / _HUNDRED),
        protein=round_nutrient(per_100g.protein * grams / _HUNDRED),
        carbs=round_nutrient(per_100g.carbs * grams / _HUNDRED),
        fat=round_nutrient(per_100g.fat * grams / _HUNDRED),
    )


def sum_macros(entries: list[EntryItem]) -> MacroProfile:
    """Sum the snapshots of a list of entries."""
    total = MacroProfile.zero()
    for entry in entries:
        total = total.plus(entry.macros)
    return total


def utc_day_window(start: date, end: date) -> tuple[datetime, datetime]:
    """Return the closed-open UTC interval covering start..end inclusive."""
    # The exclusive upper bound is the next midnight, which date.max does not have.
    if end >= date.max:
        raise InvalidInputError("Date must be before 9999-12-31")
    window_start = datetime.combine(start, time.min, tzinfo=UTC)
    window_end = datetime.combine(end + timedelta(days=1), time.min, tzinfo=UTC)
    return window_start, window_end


def to_utc(value: datetime) -> datetime:
    """Convert to UTC; naive datetimes are taken as UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _created_at(logged_at: datetime | None) -> datetime:
    return to_utc(logged_at) if logged_at else datetime.now(tz=UTC)


def _validate_grams(grams: Decimal | int | float) -> Decimal:
    # Stored as numeric(10, 2); the snapshot must be computed from the stored value.
    value = round_nutrient(to_decimal(grams))
    if value <= ZERO or value > MAX_ENTRY_GRAMS:
        raise InvalidInputError("Grams must be greater than 0 and at most 10000")
    return value
