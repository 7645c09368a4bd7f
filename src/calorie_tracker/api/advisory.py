"""Chat, suggestions, recipe analysis and photo recognition endpoints."""

from __future__ import annotations

import logging
from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING

from fastapi import APIRouter, File, Query, Request, UploadFile, status
from fastapi.responses import JSONResponse

from calorie_tracker.api.dependencies import CurrentUserId
from calorie_tracker.api.schemas import (
    ChatRequest,
    ChatResponse,
    FoodSuggestionsResponse,
    RecipeAnalysisRequest,
)
from calorie_tracker.domain.advisory import Err
from calorie_tracker.domain.errors import InvalidInputError
from calorie_tracker.domain.recipes import RecipeAnalysis
from calorie_tracker.domain.vision import ImageRecognition

if TYPE_CHECKING:
    from calorie_tracker.containers import AppContainer

_logger = logging.getLogger(__name__)

router = APIRouter(tags=["advisory"])

ALLOWED_IMAGE_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/webp"}
_NOT_CONFIGURED = "OpenAI API key is not configured"


@router.post("/chat")
async def chat(
    payload: ChatRequest, user_id: CurrentUserId, request: Request
) -> ChatResponse:
    """Answer a nutrition question with the user's context."""
    container: AppContainer = request.app.state.container
    reply = await container.chat_service.reply(
        user_id, payload.message, payload.turns()
    )
    return ChatResponse(reply=reply)


@router.get("/suggestions")
async def suggestions(
    user_id: CurrentUserId,
    request: Request,
    day: date | None = Query(default=None, alias="date"),
) -> FoodSuggestionsResponse:
    """Suggest foods that fit what is left of today's goals."""
    container: AppContainer = request.app.state.container
    result = await container.suggestions_service.suggest(user_id, day)
    return FoodSuggestionsResponse.from_suggestions(result)


@router.post("/recipe/analyze", response_model=RecipeAnalysis)
async def analyze_recipe(
    payload: RecipeAnalysisRequest, user_id: CurrentUserId, request: Request
) -> RecipeAnalysis | JSONResponse:
    """Break a recipe down into ingredients and nutrition."""
    container: AppContainer = request.app.state.container
    service = container.recipe_service
    if not service.is_configured:
        return _error(status.HTTP_503_SERVICE_UNAVAILABLE, _NOT_CONFIGURED)
    result = await service.analyze(payload.recipe_text, payload.servings)
    if isinstance(result, Err):
        _logger.info("Recipe analysis failed", extra={"user_id": str(user_id)})
        return _error(
            status.HTTP_502_BAD_GATEWAY,
            "Failed to analyze recipe. Please ensure the recipe is properly formatted.",
        )
    return result.value


@router.post("/image-recognition/analyze", response_model=ImageRecognition)
async def analyze_image(
    user_id: CurrentUserId,
    request: Request,
    file: UploadFile = File(...),
) -> ImageRecognition | JSONResponse:
    """Identify foods and estimate portions in an uploaded photo."""
    container: AppContainer = request.app.state.container
    service = container.image_recognition_service
    if not service.is_configured:
        return _error(status.HTTP_503_SERVICE_UNAVAILABLE, _NOT_CONFIGURED)
    if (file.content_type or "").lower() not in ALLOWED_IMAGE_TYPES:
        raise InvalidInputError("Invalid file type. Only JPEG, PNG, and WebP are allowed.")
    # Read at most one byte past the limit.
    image_bytes = await file.read(service.max_image_bytes + 1)
    if not image_bytes:
        raise InvalidInputError("No image file provided")
    if len(image_bytes) > service.max_image_bytes:
        raise InvalidInputError("File size exceeds 20MB limit")

    result = await service.analyze(image_bytes)
    if isinstance(result, Err):
        _logger.info("Image recognition failed", extra={"user_id": str(user_id)})
        return _error(status.HTTP_502_BAD_GATEWAY, "Failed to analyze image")
    return result.value


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})
