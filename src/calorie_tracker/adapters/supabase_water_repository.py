"""Supabase repository for water entries."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from calorie_tracker.adapters.supabase_rows import parse_timestamp
from calorie_tracker.domain.water import WaterEntry
from calorie_tracker.services.water import WaterRepository


@dataclass
class SupabaseWaterRepository(WaterRepository):
    """Supabase implementation for water logs."""

    client: Client

    def list_for_day(self, user_id: UUID, day: date) -> list[WaterEntry]:
        """Return the day's entries ordered by creation time."""
        response = (
            self.client.table("water_entries")
            .select("*")
            .eq("user_id", str(user_id))
            .eq("entry_date", day.isoformat())
            .order("created_at")
            .execute()
        )
        return [_parse_water(row) for row in response.data or []]

    def create_entry(
        self, user_id: UUID, day: date, milliliters: int, created_at: datetime
    ) -> WaterEntry:
        """Insert a water entry row."""
        response = (
            self.client.table("water_entries")
            .insert(
                {
                    "user_id": str(user_id),
                    "entry_date": day.isoformat(),
                    "milliliters": milliliters,
                    "created_at": created_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create water entry")
        return _parse_water(response.data[0])

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> bool:
        """Delete an owned entry."""
        response = (
            self.client.table("water_entries")
            .delete()
            .eq("id", str(entry_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        return bool(response.data)


def _parse_water(row: dict) -> WaterEntry:
    return WaterEntry(
        id=UUID(row["id"]),
        user_id=UUID(row["user_id"]),
        day=date.fromisoformat(row["entry_date"]),
        milliliters=int(row["milliliters"]),
        created_at=parse_timestamp(row["created_at"]),
    )
