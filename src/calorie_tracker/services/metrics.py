"""Daily and date-range nutrition metrics derived from the entry ledger."""

from dataclasses import dataclass
from datetime import UTC, date, timedelta
from decimal import Decimal
from uuid import UUID

from calorie_tracker.domain.entries import EntryItem
from calorie_tracker.domain.errors import InvalidInputError
from calorie_tracker.domain.metrics import (
    DailyMetrics,
    DailySummary,
    RangeMetrics,
    TopFood,
)
from calorie_tracker.domain.nutrition import ZERO, MacroProfile
from calorie_tracker.services.entries import EntryRepository, sum_macros, utc_day_window

TOP_FOODS_LIMIT = 10


@dataclass
class MetricsService:
    """Aggregates entry snapshots on read; nothing is maintained incrementally."""

    repository: EntryRepository
    top_foods_limit: int = TOP_FOODS_LIMIT

    def daily(self, user_id: UUID, day: date) -> DailyMetrics:
        """Return totals and entries for one UTC calendar day."""
        start, end = utc_day_window(day, day)
        entries = self.repository.list_entries(user_id, start, end)
        return DailyMetrics(day=day, totals=sum_macros(entries), entries=entries)

    def range(self, user_id: UUID, start: date, end: date) -> RangeMetrics:
        """Return totals, a gap-free daily series and top foods for a range."""
        if start > end:
            raise InvalidInputError("'from' date must be before 'to' date")
        window_start, window_end = utc_day_window(start, end)
        entries = self.repository.list_entries(user_id, window_start, window_end)
        return RangeMetrics(
            start=start,
            end=end,
            totals=sum_macros(entries),
            daily=_daily_series(start, end, entries),
            top_foods=_top_foods(entries, self.top_foods_limit),
        )


def _daily_series(start: date, end: date, entries: list[EntryItem]) -> list[DailySummary]:
    by_day: dict[date, MacroProfile] = {}
    for entry in entries:
        day = entry.created_at.astimezone(UTC).date()
        by_day[day] = by_day.get(day, MacroProfile.zero()).plus(entry.macros)

    series = []
    for offset in range((end - start).days + 1):
        day = start + timedelta(days=offset)
        series.append(DailySummary(day=day, totals=by_day.get(day, MacroProfile.zero())))
    return series


def _top_foods(entries: list[EntryItem], limit: int) -> list[TopFood]:
    groups: dict[UUID | None, tuple[str, Decimal, int]] = {}
    # Entries arrive newest first; grouping oldest first keeps ties in logging order.
    for entry in reversed(entries):
        name, calories, count = groups.get(entry.food_id, (entry.food_name, ZERO, 0))
        groups[entry.food_id] = (name, calories + entry.macros.calories, count + 1)

    foods = [
        TopFood(food_id=food_id, food_name=name, total_calories=calories, entry_count=count)
        for food_id, (name, calories, count) in groups.items()
    ]
    foods = sorted(foods, key=lambda food: food.total_calories, reverse=True)
    return foods[:limit]
