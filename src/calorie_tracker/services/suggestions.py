"""Food suggestions for closing the gap to today's goals."""

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime
from decimal import Decimal
from uuid import UUID

from calorie_tracker.domain.advisory import (
    Err,
    FoodSuggestions,
    RemainingNutrients,
    SuggestedFood,
)
from calorie_tracker.domain.errors import NotFoundError, UpstreamUnavailableError
from calorie_tracker.domain.models import UserGoals
from calorie_tracker.domain.nutrition import ZERO, MacroProfile
from calorie_tracker.services.advisory import ModelClient, decode_model_json
from calorie_tracker.services.metrics import MetricsService
from calorie_tracker.services.users import UserRepository

_logger = logging.getLogger(__name__)

GOALS_MET_MESSAGE = "Great job! You've met your daily goals!"
NOT_CONFIGURED_MESSAGE = "AI suggestions are not configured"
UNAVAILABLE_MESSAGE = "Suggestions are unavailable right now. Please try again later."

_SYSTEM_PROMPT = (
    "You are a nutrition expert providing personalized food suggestions."
)


@dataclass
class SuggestionsService:
    """Asks the model for foods that fit the remaining daily budget."""

    client: ModelClient | None
    model: str
    user_repository: UserRepository
    metrics: MetricsService
    goal_met_threshold: int = 50

    async def suggest(self, user_id: UUID, day: date | None = None) -> FoodSuggestions:
        """Return remaining nutrients and model suggestions for the day."""
        user = self.user_repository.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")

        target_day = day or datetime.now(tz=UTC).date()
        daily = self.metrics.daily(user_id, target_day)
        remaining = remaining_nutrients(user.goals, daily.totals)

        if remaining.calories <= self.goal_met_threshold:
            return FoodSuggestions(
                remaining=remaining, suggestions=[], message=GOALS_MET_MESSAGE
            )
        if self.client is None:
            return FoodSuggestions(
                remaining=remaining, suggestions=[], message=NOT_CONFIGURED_MESSAGE
            )

        eaten = list(dict.fromkeys(entry.food_name for entry in daily.entries))
        try:
            text = await self.client.complete(
                model=self.model,
                messages=[
                    {"role": "system", "content": _SYSTEM_PROMPT},
                    {"role": "user", "content": build_prompt(remaining, eaten)},
                ],
                temperature=0.7,
                max_tokens=1000,
            )
        except UpstreamUnavailableError as exc:
            _logger.warning("Suggestions model call failed: %s", exc.message)
            return FoodSuggestions(
                remaining=remaining, suggestions=[], message=UNAVAILABLE_MESSAGE
            )

        result = decode_model_json(text, list[SuggestedFood])
        if isinstance(result, Err):
            _logger.warning("Could not decode suggestions: %s", result.reason)
            return FoodSuggestions(
                remaining=remaining, suggestions=[], message=UNAVAILABLE_MESSAGE
            )
        return FoodSuggestions(
            remaining=remaining,
            suggestions=result.value,
            message=f"You have {remaining.calories} calories remaining today",
        )


def remaining_nutrients(goals: UserGoals, totals: MacroProfile) -> RemainingNutrients:
    """Return goal minus intake for each nutrient, never below zero."""
    return RemainingNutrients(
        calories=max(0, goals.calorie_goal - int(totals.calories)),
        protein=max(ZERO, Decimal(goals.protein_goal) - totals.protein),
        carbs=max(ZERO, Decimal(goals.carbs_goal) - totals.carbs),
        fat=max(ZERO, Decimal(goals.fat_goal) - totals.fat),
    )


def build_prompt(remaining: RemainingNutrients, eaten: list[str]) -> str:
    """Render the user prompt describing the remaining budget."""
    eaten_text = ", ".join(eaten) if eaten else "nothing yet"
    return f"""The user needs to consume approximately:
- {remaining.calories} more calories
- {remaining.protein:.0f}g more protein
- {remaining.carbs:.0f}g more carbs
- {remaining.fat:.0f}g more fat

They have already eaten: {eaten_text}

Suggest 3-5 specific foods or meals that would help them meet their remaining goals. For each suggestion, provide:
1. Food name
2. Brief reason why it's a good choice
3. Estimated serving size in grams
4. Approximate macros (calories, protein, carbs, fat)

Format as JSON array:
[
  {{
    "name": "Food name",
    "reason": "Why this helps",
    "estimatedGrams": 150,
    "calories": 250,
    "protein": 20,
    "carbs": 30,
    "fat": 5
  }}
]

Return ONLY the JSON array, no markdown or other text."""
