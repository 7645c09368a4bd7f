"""Supabase repository for meal entries."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from calorie_tracker.adapters.supabase_rows import decimal_value, parse_timestamp
from calorie_tracker.domain.entries import UNKNOWN_FOOD_NAME, EntryItem, NewEntry
from calorie_tracker.domain.nutrition import MacroProfile, to_decimal
from calorie_tracker.services.entries import EntryRepository

# The food name is embedded at read time rather than stored on the entry.
_ENTRY_COLUMNS = "*, foods(name)"


@dataclass
class SupabaseEntryRepository(EntryRepository):
    """Supabase implementation for the entry ledger."""

    client: Client

    def list_entries(
        self, user_id: UUID, start: datetime | None, end: datetime | None
    ) -> list[EntryItem]:
        """Return entries in [start, end), newest first."""
        query = (
            self.client.table("entry_items")
            .select(_ENTRY_COLUMNS)
            .eq("user_id", str(user_id))
        )
        if start is not None:
            query = query.gte("created_at", start.isoformat())
        if end is not None:
            query = query.lt("created_at", end.isoformat())
        response = query.order("created_at", desc=True).execute()
        return [_parse_entry(row) for row in response.data or []]

    def list_recent(self, user_id: UUID, limit: int) -> list[EntryItem]:
        """Return the most recent entries."""
        response = (
            self.client.table("entry_items")
            .select(_ENTRY_COLUMNS)
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]

    def get_entry(self, user_id: UUID, entry_id: UUID) -> EntryItem | None:
        """Return an entry owned by the user."""
        response = (
            self.client.table("entry_items")
            .select(_ENTRY_COLUMNS)
            .eq("id", str(entry_id))
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def create_entry(
        self, user_id: UUID, entry: NewEntry, created_at: datetime
    ) -> EntryItem:
        """Insert an entry row and read it back with the food name."""
        response = (
            self.client.table("entry_items")
            .insert(
                {
                    "user_id": str(user_id),
                    "created_at": created_at.isoformat(),
                    **_entry_payload(entry),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create entry")
        created = self.get_entry(user_id, UUID(response.data[0]["id"]))
        if created is None:
            raise RuntimeError("Failed to read back created entry")
        return created

    def create_entries(
        self, user_id: UUID, entries: list[NewEntry], created_at: datetime
    ) -> list[EntryItem]:
        """Insert all rows in a single statement, then read them back in order."""
        payload = [
            {
                "user_id": str(user_id),
                "created_at": created_at.isoformat(),
                **_entry_payload(entry),
            }
            for entry in entries
        ]
        response = self.client.table("entry_items").insert(payload).execute()
        if not response.data or len(response.data) != len(entries):
            raise RuntimeError("Failed to create entries")

        entry_ids = [row["id"] for row in response.data]
        read_back = (
            self.client.table("entry_items")
            .select(_ENTRY_COLUMNS)
            .in_("id", entry_ids)
            .eq("user_id", str(user_id))
            .execute()
        )
        by_id = {row["id"]: _parse_entry(row) for row in read_back.data or []}
        if any(entry_id not in by_id for entry_id in entry_ids):
            raise RuntimeError("Failed to read back created entries")
        return [by_id[entry_id] for entry_id in entry_ids]

    def update_entry(
        self, user_id: UUID, entry_id: UUID, entry: NewEntry
    ) -> EntryItem | None:
        """Overwrite food, grams and snapshot of an owned entry."""
        response = (
            self.client.table("entry_items")
            .update(_entry_payload(entry))
            .eq("id", str(entry_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        if not response.data:
            return None
        return self.get_entry(user_id, entry_id)

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> bool:
        """Delete an owned entry."""
        response = (
            self.client.table("entry_items")
            .delete()
            .eq("id", str(entry_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        return bool(response.data)


def _entry_payload(entry: NewEntry) -> dict[str, object]:
    return {
        "food_id": str(entry.food_id),
        "grams": decimal_value(entry.grams),
        "calories": decimal_value(entry.macros.calories),
        "protein": decimal_value(entry.macros.protein),
        "carbs": decimal_value(entry.macros.carbs),
        "fat": decimal_value(entry.macros.fat),
    }


def _parse_entry(row: dict) -> EntryItem:
    food = row.get("foods") or {}
    food_id = row.get("food_id")
    return EntryItem(
        id=UUID(row["id"]),
        user_id=UUID(row["user_id"]),
        food_id=UUID(food_id) if food_id else None,
        food_name=food.get("name") or UNKNOWN_FOOD_NAME,
        grams=to_decimal(row.get("grams")),
        macros=MacroProfile(
            calories=to_decimal(row.get("calories")),
            protein=to_decimal(row.get("protein")),
            carbs=to_decimal(row.get("carbs")),
            fat=to_decimal(row.get("fat")),
        ),
        created_at=parse_timestamp(row["created_at"]),
    )
