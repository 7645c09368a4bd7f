"""Result types and models shared by the advisory services."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Annotated, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

T = TypeVar("T")

# Decimals leave the API as JSON numbers rather than strings.
JsonDecimal = Annotated[
    Decimal, PlainSerializer(float, return_type=float, when_used="json")
]


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful decode or model call."""

    value: T


@dataclass(frozen=True)
class Err:
    """Failed decode or model call with a short reason."""

    reason: str


AdvisoryResult = Ok[T] | Err


class ModelReply(BaseModel):
    """Base for JSON payloads returned by the language model."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


@dataclass(frozen=True)
class ChatTurn:
    """A previous message in the chat conversation."""

    sender: str
    text: str


class SuggestedFood(ModelReply):
    """A food the model suggests to close the remaining gap."""

    name: str
    reason: str = ""
    estimated_grams: int = 100
    calories: JsonDecimal = Decimal("0")
    protein: JsonDecimal = Decimal("0")
    carbs: JsonDecimal = Decimal("0")
    fat: JsonDecimal = Decimal("0")


@dataclass(frozen=True)
class RemainingNutrients:
    """What is left of today's goals, floored at zero."""

    calories: int
    protein: Decimal
    carbs: Decimal
    fat: Decimal


@dataclass(frozen=True)
class FoodSuggestions:
    """Suggestions response with the remaining-nutrient context."""

    remaining: RemainingNutrients
    suggestions: list[SuggestedFood]
    message: str
