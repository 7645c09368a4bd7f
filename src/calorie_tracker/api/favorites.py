"""Favorite meal endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Request, Response, status

from calorie_tracker.api.dependencies import CurrentUserId
from calorie_tracker.api.schemas import (
    CreateFavoriteMealRequest,
    EntryResponse,
    FavoriteMealItemPayload,
    FavoriteMealResponse,
    LogFavoriteMealRequest,
)
from calorie_tracker.domain.errors import NotFoundError
from calorie_tracker.domain.favorites import FavoriteItemRequest

if TYPE_CHECKING:
    from calorie_tracker.containers import AppContainer

router = APIRouter(prefix="/favorite-meals", tags=["favorite-meals"])

_MEAL_NOT_FOUND = "Favorite meal not found"


@router.get("")
async def list_favorite_meals(
    user_id: CurrentUserId, request: Request
) -> list[FavoriteMealResponse]:
    """Return saved meals newest first."""
    container: AppContainer = request.app.state.container
    views = container.favorite_meal_service.list_meals(user_id)
    return [FavoriteMealResponse.from_view(view) for view in views]


@router.post("")
async def create_favorite_meal(
    payload: CreateFavoriteMealRequest, user_id: CurrentUserId, request: Request
) -> FavoriteMealResponse:
    """Save a meal template."""
    container: AppContainer = request.app.state.container
    view = container.favorite_meal_service.create_meal(
        user_id,
        payload.name,
        payload.description,
        [
            FavoriteItemRequest(food_id=item.food_id, grams=item.grams)
            for item in payload.items
        ],
    )
    return FavoriteMealResponse.from_view(view)


@router.delete(
    "/{meal_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response
)
async def delete_favorite_meal(
    meal_id: UUID, user_id: CurrentUserId, request: Request
) -> Response:
    """Delete a meal template."""
    container: AppContainer = request.app.state.container
    if not container.favorite_meal_service.delete_meal(user_id, meal_id):
        raise NotFoundError(_MEAL_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{meal_id}/items")
async def favorite_meal_items(
    meal_id: UUID, user_id: CurrentUserId, request: Request
) -> list[FavoriteMealItemPayload]:
    """Return the meal as (food, grams) pairs ready to log."""
    container: AppContainer = request.app.state.container
    items = container.favorite_meal_service.get_meal_items(user_id, meal_id)
    if items is None:
        raise NotFoundError(_MEAL_NOT_FOUND)
    return [
        FavoriteMealItemPayload(food_id=item.food_id, grams=item.grams)
        for item in items
    ]


@router.post("/{meal_id}/log", status_code=status.HTTP_201_CREATED)
async def log_favorite_meal(
    meal_id: UUID,
    user_id: CurrentUserId,
    request: Request,
    payload: LogFavoriteMealRequest | None = None,
) -> list[EntryResponse]:
    """Log every item of the meal as a new entry."""
    container: AppContainer = request.app.state.container
    logged_at = payload.logged_at if payload else None
    entries = container.favorite_meal_service.log_meal(user_id, meal_id, logged_at)
    if entries is None:
        raise NotFoundError(_MEAL_NOT_FOUND)
    return [EntryResponse.from_entry(entry) for entry in entries]
