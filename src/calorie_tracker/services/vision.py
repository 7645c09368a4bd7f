"""Food photo recognition using a vision-capable model."""

import base64
import logging
from dataclasses import dataclass

from calorie_tracker.domain.advisory import AdvisoryResult, Err
from calorie_tracker.domain.errors import UpstreamUnavailableError
from calorie_tracker.domain.vision import ImageRecognition
from calorie_tracker.services.advisory import ModelClient, decode_model_json

_logger = logging.getLogger(__name__)

NOT_CONFIGURED_REASON = "OpenAI API key is not configured"
MAX_IMAGE_BYTES = 20 * 1024 * 1024

RECOGNITION_PROMPT = """Analyze this food image and identify all visible food items. For each item, provide:
1. Food name
2. Estimated portion size in grams
3. Estimated nutritional information (calories, protein, carbs, fat)

Be as accurate as possible with portion sizes. If you see multiple items, list each separately.

Respond in this exact JSON format:
{
  "foods": [
    {
      "name": "Food name",
      "estimatedGrams": 150,
      "estimatedCalories": 200,
      "estimatedProtein": 20,
      "estimatedCarbs": 15,
      "estimatedFat": 8,
      "notes": "Any additional notes"
    }
  ],
  "rawAnalysis": "Brief overall description of the meal"
}"""


@dataclass
class ImageRecognitionService:
    """Service that prepares vision prompts and validates results."""

    client: ModelClient | None
    model: str
    max_image_bytes: int = MAX_IMAGE_BYTES

    @property
    def is_configured(self) -> bool:
        """Return True when a model client is available."""
        return self.client is not None

    async def analyze(self, image_bytes: bytes) -> AdvisoryResult[ImageRecognition]:
        """Identify foods and estimate portions in a photo."""
        if self.client is None:
            return Err(NOT_CONFIGURED_REASON)
        messages = [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": RECOGNITION_PROMPT},
                    {"type": "image_url", "image_url": {"url": _to_data_url(image_bytes)}},
                ],
            }
        ]
        try:
            text = await self.client.complete(
                model=self.model, messages=messages, temperature=None, max_tokens=1000
            )
        except UpstreamUnavailableError as exc:
            _logger.warning("Vision model call failed: %s", exc.message)
            return Err(exc.message)

        result = decode_model_json(text, ImageRecognition)
        if isinstance(result, Err):
            _logger.warning("Could not decode image recognition: %s", result.reason)
        return result


def _to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
