"""Nutrition domain models and decimal helpers."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

ZERO = Decimal("0")
_CENTS = Decimal("0.01")


@dataclass(frozen=True)
class MacroProfile:
    """Calories and macronutrients, either per 100 g or for a portion."""

    calories: Decimal
    protein: Decimal
    carbs: Decimal
    fat: Decimal

    @classmethod
    def zero(cls) -> "MacroProfile":
        """Return an all-zero profile."""
        return cls(calories=ZERO, protein=ZERO, carbs=ZERO, fat=ZERO)

    def plus(self, other: "MacroProfile") -> "MacroProfile":
        """Return the element-wise sum of two profiles."""
        return MacroProfile(
            calories=self.calories + other.calories,
            protein=self.protein + other.protein,
            carbs=self.carbs + other.carbs,
            fat=self.fat + other.fat,
        )


def round_nutrient(value: Decimal) -> Decimal:
    """Round to two decimal places, half away from zero."""
    return value.quantize(_CENTS, rounding=ROUND_HALF_UP)


def to_decimal(value: object) -> Decimal:
    """Convert a database or JSON number into a Decimal without float drift."""
    if isinstance(value, Decimal):
        return value
    if value is None:
        return ZERO
    return Decimal(str(value))
