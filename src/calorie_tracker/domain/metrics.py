"""Domain models for derived nutrition metrics."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from uuid import UUID

from calorie_tracker.domain.entries import EntryItem
from calorie_tracker.domain.nutrition import MacroProfile


@dataclass(frozen=True)
class DailyMetrics:
    """Totals for one calendar day plus the entries behind them."""

    day: date
    totals: MacroProfile
    entries: list[EntryItem]


@dataclass(frozen=True)
class DailySummary:
    """One row of a dense daily series."""

    day: date
    totals: MacroProfile


@dataclass(frozen=True)
class TopFood:
    """Aggregated calories for a food over a date range."""

    food_id: UUID | None
    food_name: str
    total_calories: Decimal
    entry_count: int


@dataclass(frozen=True)
class RangeMetrics:
    """Totals, daily series and top foods for a date range."""

    start: date
    end: date
    totals: MacroProfile
    daily: list[DailySummary]
    top_foods: list[TopFood]
