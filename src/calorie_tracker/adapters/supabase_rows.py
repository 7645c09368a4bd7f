"""Helpers shared by the Supabase row mappers."""

from datetime import UTC, datetime
from decimal import Decimal

from calorie_tracker.domain.nutrition import MacroProfile, to_decimal


def parse_timestamp(value: str) -> datetime:
    """Parse a PostgREST timestamp, treating naive values as UTC."""
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def decimal_value(value: Decimal) -> str:
    """Serialize a Decimal for a numeric column without float drift."""
    return str(value)


def parse_per_100g(row: dict) -> MacroProfile:
    """Build a per-100 g profile from a foods row."""
    return MacroProfile(
        calories=to_decimal(row.get("calories_per_100g")),
        protein=to_decimal(row.get("protein_per_100g")),
        carbs=to_decimal(row.get("carbs_per_100g")),
        fat=to_decimal(row.get("fat_per_100g")),
    )
