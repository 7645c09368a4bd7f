"""Domain models for users and goals."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class UserGoals:
    """Daily nutrition targets for a user."""

    calorie_goal: int
    protein_goal: int
    carbs_goal: int
    fat_goal: int


DEFAULT_GOALS = UserGoals(
    calorie_goal=2000, protein_goal=150, carbs_goal=250, fat_goal=65
)
DEFAULT_WATER_GOAL_ML = 2000


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: UUID
    first_name: str
    middle_name: str | None
    last_name: str
    email: str
    password_hash: str
    created_at: datetime
    goals: UserGoals
    water_goal_ml: int = DEFAULT_WATER_GOAL_ML
    profile_picture: str | None = None

    @property
    def full_name(self) -> str:
        """Return the display name including the middle name when present."""
        if self.middle_name:
            return f"{self.first_name} {self.middle_name} {self.last_name}"
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True)
class NewUser:
    """Fields needed to create a user row."""

    first_name: str
    middle_name: str | None
    last_name: str
    email: str
    password_hash: str


@dataclass(frozen=True)
class AuthResult:
    """Issued bearer token plus the authenticated user."""

    token: str
    user: UserRecord
