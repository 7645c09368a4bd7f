"""Supabase-backed user repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from calorie_tracker.adapters.supabase_rows import parse_timestamp
from calorie_tracker.domain.models import (
    DEFAULT_GOALS,
    DEFAULT_WATER_GOAL_ML,
    NewUser,
    UserGoals,
    UserRecord,
)
from calorie_tracker.services.users import UserRepository


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        """Return the user for an id, if present."""
        response = (
            self.client.table("users")
            .select("*")
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_user(response.data[0])
        return None

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user for an email, if present."""
        response = (
            self.client.table("users")
            .select("*")
            .eq("email", email)
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_user(response.data[0])
        return None

    def create_user(self, user: NewUser) -> UserRecord:
        """Create a new user row with default goals and return it."""
        response = (
            self.client.table("users")
            .insert(
                {
                    "first_name": user.first_name,
                    "middle_name": user.middle_name,
                    "last_name": user.last_name,
                    "email": user.email,
                    "password_hash": user.password_hash,
                    **_goals_payload(DEFAULT_GOALS),
                    "water_goal_ml": DEFAULT_WATER_GOAL_ML,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create user in Supabase")
        return _parse_user(response.data[0])

    def update_goals(self, user_id: UUID, goals: UserGoals) -> UserRecord | None:
        """Replace the user's daily goals."""
        return self._update(user_id, _goals_payload(goals))

    def update_profile(
        self,
        user_id: UUID,
        first_name: str,
        middle_name: str | None,
        last_name: str,
    ) -> UserRecord | None:
        """Replace the user's name fields."""
        return self._update(
            user_id,
            {
                "first_name": first_name,
                "middle_name": middle_name,
                "last_name": last_name,
            },
        )

    def update_password_hash(self, user_id: UUID, password_hash: str) -> None:
        """Store a new password hash."""
        self.client.table("users").update({"password_hash": password_hash}).eq(
            "id", str(user_id)
        ).execute()

    def set_profile_picture(
        self, user_id: UUID, picture: str | None
    ) -> UserRecord | None:
        """Store or clear the profile picture."""
        return self._update(user_id, {"profile_picture": picture})

    def delete_user_cascade(self, user_id: UUID) -> bool:
        """Run the delete_user_account function, which deletes in one transaction."""
        response = self.client.rpc(
            "delete_user_account", {"p_user_id": str(user_id)}
        ).execute()
        return bool(response.data)

    def _update(self, user_id: UUID, payload: dict[str, object]) -> UserRecord | None:
        response = (
            self.client.table("users")
            .update(payload)
            .eq("id", str(user_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_user(response.data[0])


def _goals_payload(goals: UserGoals) -> dict[str, object]:
    return {
        "calorie_goal": goals.calorie_goal,
        "protein_goal": goals.protein_goal,
        "carbs_goal": goals.carbs_goal,
        "fat_goal": goals.fat_goal,
    }


def _parse_user(row: dict) -> UserRecord:
    return UserRecord(
        id=UUID(row["id"]),
        first_name=row["first_name"],
        middle_name=row.get("middle_name"),
        last_name=row["last_name"],
        email=row["email"],
        password_hash=row["password_hash"],
        created_at=parse_timestamp(row["created_at"]),
        goals=UserGoals(
            calorie_goal=int(row.get("calorie_goal", DEFAULT_GOALS.calorie_goal)),
            protein_goal=int(row.get("protein_goal", DEFAULT_GOALS.protein_goal)),
            carbs_goal=int(row.get("carbs_goal", DEFAULT_GOALS.carbs_goal)),
            fat_goal=int(row.get("fat_goal", DEFAULT_GOALS.fat_goal)),
        ),
        water_goal_ml=int(row.get("water_goal_ml", DEFAULT_WATER_GOAL_ML)),
        profile_picture=row.get("profile_picture"),
    )
