"""Nutrition chat assistant with per-user context."""

import logging
from collections import Counter
from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from calorie_tracker.domain.advisory import ChatTurn
from calorie_tracker.domain.entries import EntryItem
from calorie_tracker.domain.errors import UpstreamUnavailableError
from calorie_tracker.domain.metrics import DailyMetrics
from calorie_tracker.domain.models import UserGoals
from calorie_tracker.services.advisory import ModelClient
from calorie_tracker.services.entries import EntryRepository
from calorie_tracker.services.metrics import MetricsService
from calorie_tracker.services.users import UserRepository

_logger = logging.getLogger(__name__)

DISABLED_REPLY = (
    "Chat functionality is disabled. Please configure a valid OpenAI API key."
)
EMPTY_MESSAGE_REPLY = "Please ask a question about food or nutrition so I can help."
USER_MISSING_REPLY = "User not found. Please try again."
UPSTREAM_FAILURE_REPLY = "Sorry, something went wrong. Please try again later."
NO_ANSWER_REPLY = "I couldn't think of a good answer. Try asking in another way!"

RECENT_ENTRIES_LIMIT = 5
MOST_USED_LIMIT = 10
_HISTORY_ROLES = {"user", "assistant"}

_ASSISTANT_BRIEF = """You are an advanced, knowledgeable nutrition assistant inside a calorie tracking app. You provide comprehensive, detailed, and personalized nutrition advice.

CAPABILITIES:
- Provide detailed information about calories, macronutrients and micronutrients
- Offer health tips and dietary recommendations
- Suggest meal planning ideas and recipes
- Give personalized advice based on the user's goals and current intake
- Help with weight management, muscle building and general health

RESPONSE STYLE:
- Use specific examples and concrete food recommendations
- Be friendly, helpful and encouraging
- Include practical tips and actionable advice

IMPORTANT DISCLAIMERS:
- If asked for medical advice, recommend consulting a healthcare professional
- Do not diagnose medical conditions

USER CONTEXT:
"""

_CLOSING = (
    "\nUse this context to provide personalized recommendations. When suggesting "
    "foods or meals, consider what the user still needs to meet their goals. "
    "Reference their recent eating patterns when relevant."
)


@dataclass
class ChatService:
    """Answers nutrition questions; failures degrade to canned replies."""

    client: ModelClient | None
    model: str
    user_repository: UserRepository
    entry_repository: EntryRepository
    metrics: MetricsService

    async def reply(
        self, user_id: UUID, message: str, history: list[ChatTurn] | None = None
    ) -> str:
        """Return the assistant's reply text."""
        if self.client is None:
            return DISABLED_REPLY
        if not message.strip():
            return EMPTY_MESSAGE_REPLY
        user = self.user_repository.get_by_id(user_id)
        if user is None:
            return USER_MISSING_REPLY

        today = datetime.now(tz=UTC).date()
        daily = self.metrics.daily(user_id, today)
        recent = self.entry_repository.list_recent(user_id, RECENT_ENTRIES_LIMIT)
        all_entries = self.entry_repository.list_entries(user_id, None, None)
        system_prompt = build_system_prompt(
            user.goals, daily, recent, most_used_foods(all_entries)
        )

        messages: list[dict[str, Any]] = [{"role": "system", "content": system_prompt}]
        for turn in history or []:
            if turn.sender in _HISTORY_ROLES:
                messages.append({"role": turn.sender, "content": turn.text})
        messages.append({"role": "user", "content": message})

        try:
            text = await self.client.complete(
                model=self.model, messages=messages, temperature=0.7, max_tokens=1000
            )
        except UpstreamUnavailableError as exc:
            _logger.warning("Chat model call failed: %s", exc.message)
            return UPSTREAM_FAILURE_REPLY
        return text.strip() or NO_ANSWER_REPLY


def most_used_foods(
    entries: list[EntryItem], limit: int = MOST_USED_LIMIT
) -> list[tuple[str, int]]:
    """Return (food name, times logged) ordered by count."""
    counts = Counter((entry.food_id, entry.food_name) for entry in entries)
    return [(name, count) for (_, name), count in counts.most_common(limit)]


def remaining_whole(goal: int, consumed: Decimal) -> int:
    """Return the goal minus consumed, truncated and floored at zero."""
    return max(0, goal - int(consumed))


def build_system_prompt(
    goals: UserGoals,
    daily: DailyMetrics,
    recent: list[EntryItem],
    most_used: list[tuple[str, int]],
) -> str:
    """Render the system prompt with goals, today's intake and habits."""
    totals = daily.totals
    lines = [
        _ASSISTANT_BRIEF,
        "Daily Goals:",
        f"- Calories: {goals.calorie_goal} kcal",
        f"- Protein: {goals.protein_goal} g",
        f"- Carbs: {goals.carbs_goal} g",
        f"- Fat: {goals.fat_goal} g",
        "",
        "Today's Intake (so far):",
        f"- Calories: {totals.calories:.0f} / {goals.calorie_goal} kcal "
        f"({_percent(totals.calories, goals.calorie_goal):.1f}%)",
        f"- Protein: {totals.protein:.1f} / {goals.protein_goal} g "
        f"({_percent(totals.protein, goals.protein_goal):.1f}%)",
        f"- Carbs: {totals.carbs:.1f} / {goals.carbs_goal} g "
        f"({_percent(totals.carbs, goals.carbs_goal):.1f}%)",
        f"- Fat: {totals.fat:.1f} / {goals.fat_goal} g "
        f"({_percent(totals.fat, goals.fat_goal):.1f}%)",
        "",
        "Remaining Needs Today:",
        f"- Calories: {remaining_whole(goals.calorie_goal, totals.calories)} kcal",
        f"- Protein: {remaining_whole(goals.protein_goal, totals.protein)} g",
        f"- Carbs: {remaining_whole(goals.carbs_goal, totals.carbs)} g",
        f"- Fat: {remaining_whole(goals.fat_goal, totals.fat)} g",
    ]
    if recent:
        lines.extend(["", f"Recent Food Entries (last {RECENT_ENTRIES_LIMIT}):"])
        for entry in recent:
            macros = entry.macros
            lines.append(
                f"- {entry.food_name}: {entry.grams:.0f}g ({macros.calories:.0f} kcal, "
                f"P: {macros.protein:.1f}g, C: {macros.carbs:.1f}g, F: {macros.fat:.1f}g)"
            )
    if most_used:
        lines.extend(["", "Most Used Foods:"])
        for name, count in most_used:
            lines.append(f"- {name} (logged {count} times)")
    lines.append(_CLOSING)
    return "\n".join(lines)


def _percent(consumed: Decimal, goal: int) -> Decimal:
    if goal <= 0:
        return Decimal("0")
    return consumed / Decimal(goal) * 100
