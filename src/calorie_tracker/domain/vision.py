"""Models for food photo recognition results."""

from decimal import Decimal

from pydantic import Field

from calorie_tracker.domain.advisory import JsonDecimal, ModelReply


class RecognizedFood(ModelReply):
    """Single food item detected in a photo."""

    name: str
    estimated_grams: int = Field(default=0, ge=0)
    estimated_calories: JsonDecimal = Decimal("0")
    estimated_protein: JsonDecimal = Decimal("0")
    estimated_carbs: JsonDecimal = Decimal("0")
    estimated_fat: JsonDecimal = Decimal("0")
    notes: str | None = None


class ImageRecognition(ModelReply):
    """Structured output for a food photo."""

    foods: list[RecognizedFood] = Field(default_factory=list)
    raw_analysis: str | None = None
