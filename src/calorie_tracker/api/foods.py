"""Food catalog endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Request, Response, status

from calorie_tracker.api.dependencies import CurrentUserId
from calorie_tracker.api.schemas import FoodRequest, FoodResponse
from calorie_tracker.domain.errors import FoodNotFoundError

if TYPE_CHECKING:
    from calorie_tracker.containers import AppContainer

router = APIRouter(prefix="/foods", tags=["foods"])


@router.get("")
async def list_foods(user_id: CurrentUserId, request: Request) -> list[FoodResponse]:
    """Return global foods plus the user's own foods."""
    container: AppContainer = request.app.state.container
    foods = container.food_service.list_foods(user_id)
    return [FoodResponse.from_food(food) for food in foods]


@router.get("/{food_id}")
async def get_food(
    food_id: UUID, user_id: CurrentUserId, request: Request
) -> FoodResponse:
    """Return a single visible food."""
    container: AppContainer = request.app.state.container
    food = container.food_service.get_food(user_id, food_id)
    if food is None:
        raise FoodNotFoundError()
    return FoodResponse.from_food(food)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_food(
    payload: FoodRequest, user_id: CurrentUserId, request: Request
) -> FoodResponse:
    """Create a food owned by the user."""
    container: AppContainer = request.app.state.container
    food = container.food_service.create_food(user_id, payload.to_draft())
    return FoodResponse.from_food(food)


@router.put("/{food_id}")
async def update_food(
    food_id: UUID, payload: FoodRequest, user_id: CurrentUserId, request: Request
) -> FoodResponse:
    """Update one of the user's foods."""
    container: AppContainer = request.app.state.container
    food = container.food_service.update_food(user_id, food_id, payload.to_draft())
    if food is None:
        raise FoodNotFoundError()
    return FoodResponse.from_food(food)


@router.delete(
    "/{food_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response
)
async def delete_food(food_id: UUID, user_id: CurrentUserId, request: Request) -> Response:
    """Delete one of the user's foods; logged entries keep their snapshot."""
    container: AppContainer = request.app.state.container
    if not container.food_service.delete_food(user_id, food_id):
        raise FoodNotFoundError()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
