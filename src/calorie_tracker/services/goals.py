"""Daily nutrition goals."""

from dataclasses import dataclass
from uuid import UUID

from calorie_tracker.domain.errors import InvalidInputError
from calorie_tracker.domain.models import UserGoals
from calorie_tracker.services.users import UserRepository

GOAL_BOUNDS: dict[str, tuple[int, int, str]] = {
    "calorie_goal": (500, 10000, "Calorie goal must be between 500 and 10000"),
    "protein_goal": (10, 500, "Protein goal must be between 10 and 500g"),
    "carbs_goal": (20, 800, "Carbs goal must be between 20 and 800g"),
    "fat_goal": (10, 300, "Fat goal must be between 10 and 300g"),
}


@dataclass
class GoalsService:
    """Reads and updates a user's daily targets."""

    repository: UserRepository

    def get_goals(self, user_id: UUID) -> UserGoals | None:
        """Return the user's goals, if the user exists."""
        user = self.repository.get_by_id(user_id)
        return user.goals if user else None

    def update_goals(self, user_id: UUID, goals: UserGoals) -> UserGoals | None:
        """Validate bounds and store the new goals."""
        for field_name, (low, high, message) in GOAL_BOUNDS.items():
            value = getattr(goals, field_name)
            if not low <= value <= high:
                raise InvalidInputError(message)
        user = self.repository.update_goals(user_id, goals)
        return user.goals if user else None
