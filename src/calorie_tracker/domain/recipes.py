"""Models for recipe analysis results."""

from decimal import Decimal

from pydantic import ConfigDict, Field

from calorie_tracker.domain.advisory import JsonDecimal, ModelReply


class RecipeNutrition(ModelReply):
    """Calories and macros for a recipe or a serving."""

    calories: JsonDecimal = Decimal("0")
    protein: JsonDecimal = Decimal("0")
    carbs: JsonDecimal = Decimal("0")
    fat: JsonDecimal = Decimal("0")


class RecipeIngredient(ModelReply):
    """Single ingredient line with estimated nutrition."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str
    quantity: str = ""
    unit: str = ""
    calories: JsonDecimal = Decimal("0")
    protein: JsonDecimal = Decimal("0")
    carbs: JsonDecimal = Decimal("0")
    fat: JsonDecimal = Decimal("0")


class RecipeAnalysis(ModelReply):
    """Structured recipe breakdown."""

    recipe_name: str
    servings: int | None = Field(default=None, ge=1)
    prep_time_minutes: int = 0
    cook_time_minutes: int = 0
    ingredients: list[RecipeIngredient] = Field(default_factory=list)
    instructions: str | None = None
    total_nutrition: RecipeNutrition = Field(default_factory=RecipeNutrition)
    per_serving_nutrition: RecipeNutrition = Field(default_factory=RecipeNutrition)
