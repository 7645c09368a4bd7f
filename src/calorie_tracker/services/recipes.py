"""Recipe nutrition analysis via the language model."""

import logging
from dataclasses import dataclass

from calorie_tracker.domain.advisory import AdvisoryResult, Err, Ok
from calorie_tracker.domain.errors import InvalidInputError, UpstreamUnavailableError
from calorie_tracker.domain.recipes import RecipeAnalysis
from calorie_tracker.services.advisory import ModelClient, decode_model_json

_logger = logging.getLogger(__name__)

NOT_CONFIGURED_REASON = "OpenAI API key is not configured"

_SYSTEM_PROMPT = (
    "You are a professional nutritionist and recipe analyzer. Extract recipe "
    "details and calculate accurate nutrition information."
)

_RESPONSE_SHAPE = """{
  "recipeName": "Recipe Name",
  "servings": 4,
  "prepTimeMinutes": 15,
  "cookTimeMinutes": 30,
  "ingredients": [
    {
      "name": "ingredient name",
      "quantity": "2",
      "unit": "cups",
      "calories": 120,
      "protein": 5,
      "carbs": 20,
      "fat": 3
    }
  ],
  "instructions": "Step-by-step cooking instructions if provided in the recipe",
  "totalNutrition": {"calories": 480, "protein": 20, "carbs": 80, "fat": 12},
  "perServingNutrition": {"calories": 120, "protein": 5, "carbs": 20, "fat": 3}
}"""


@dataclass
class RecipeAnalyzerService:
    """Turns free-form recipe text into a structured nutrition breakdown."""

    client: ModelClient | None
    model: str

    @property
    def is_configured(self) -> bool:
        """Return True when a model client is available."""
        return self.client is not None

    async def analyze(
        self, recipe_text: str, servings: int | None = None
    ) -> AdvisoryResult[RecipeAnalysis]:
        """Analyze a recipe; requested servings override the detected count."""
        if not recipe_text.strip():
            raise InvalidInputError("Recipe text cannot be empty")
        if servings is not None and servings < 1:
            raise InvalidInputError("Servings must be at least 1")
        if self.client is None:
            return Err(NOT_CONFIGURED_REASON)

        try:
            text = await self.client.complete(
                model=self.model,
                messages=[
                    {"role": "system", "content": _SYSTEM_PROMPT},
                    {"role": "user", "content": build_prompt(recipe_text, servings)},
                ],
                temperature=0.3,
                max_tokens=2000,
            )
        except UpstreamUnavailableError as exc:
            _logger.warning("Recipe model call failed: %s", exc.message)
            return Err(exc.message)

        result = decode_model_json(text, RecipeAnalysis)
        if isinstance(result, Err):
            _logger.warning("Could not decode recipe analysis: %s", result.reason)
            return result
        analysis = result.value
        resolved_servings = servings or analysis.servings or 1
        return Ok(analysis.model_copy(update={"servings": resolved_servings}))


def build_prompt(recipe_text: str, servings: int | None) -> str:
    """Render the analysis prompt for a recipe."""
    if servings is not None:
        servings_note = f" The recipe should be calculated for {servings} servings."
    else:
        servings_note = " Try to detect the number of servings from the recipe."
    return (
        "Analyze this recipe and extract ALL the information in JSON format."
        f"{servings_note}\n\n"
        f"Recipe:\n{recipe_text}\n\n"
        "Return ONLY a valid JSON object with this EXACT structure "
        "(no markdown, no code blocks):\n"
        f"{_RESPONSE_SHAPE}\n\n"
        "Important:\n"
        "- Calculate accurate nutrition for EACH ingredient\n"
        "- Sum up to get total nutrition\n"
        "- Divide by servings for per-serving nutrition\n"
        "- If prep/cook time not provided, estimate based on recipe complexity\n"
        "- Return ONLY the JSON object, no other text"
    )
