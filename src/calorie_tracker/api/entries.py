"""Meal entry endpoints."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Query, Request, Response, status

from calorie_tracker.api.dependencies import CurrentUserId
from calorie_tracker.api.schemas import (
    CreateEntryRequest,
    EntryResponse,
    UpdateEntryRequest,
)
from calorie_tracker.domain.errors import (
    FoodNotFoundError,
    InvalidInputError,
    NotFoundError,
)

if TYPE_CHECKING:
    from calorie_tracker.containers import AppContainer

router = APIRouter(prefix="/food-entries", tags=["entries"])

_ENTRY_NOT_FOUND = "Entry not found"


@router.get("")
async def list_entries(
    user_id: CurrentUserId,
    request: Request,
    day: date | None = Query(default=None, alias="date"),
) -> list[EntryResponse]:
    """Return entries newest first, optionally for one UTC day."""
    container: AppContainer = request.app.state.container
    entries = container.entry_service.list_entries(user_id, day)
    return [EntryResponse.from_entry(entry) for entry in entries]


@router.get("/{entry_id}")
async def get_entry(
    entry_id: UUID, user_id: CurrentUserId, request: Request
) -> EntryResponse:
    """Return a single entry."""
    container: AppContainer = request.app.state.container
    entry = container.entry_service.get_entry(user_id, entry_id)
    if entry is None:
        raise NotFoundError(_ENTRY_NOT_FOUND)
    return EntryResponse.from_entry(entry)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_entry(
    payload: CreateEntryRequest, user_id: CurrentUserId, request: Request
) -> EntryResponse:
    """Log a portion of a food."""
    container: AppContainer = request.app.state.container
    try:
        entry = container.entry_service.create_entry(
            user_id, payload.food_id, payload.grams, payload.logged_at
        )
    except FoodNotFoundError as exc:
        raise InvalidInputError(exc.message) from exc
    return EntryResponse.from_entry(entry)


@router.put("/{entry_id}")
async def update_entry(
    entry_id: UUID,
    payload: UpdateEntryRequest,
    user_id: CurrentUserId,
    request: Request,
) -> EntryResponse:
    """Change the food or portion of an entry and recompute its snapshot."""
    container: AppContainer = request.app.state.container
    entry = container.entry_service.update_entry(
        user_id, entry_id, payload.food_id, payload.grams
    )
    if entry is None:
        raise NotFoundError(_ENTRY_NOT_FOUND)
    return EntryResponse.from_entry(entry)


@router.delete(
    "/{entry_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response
)
async def delete_entry(
    entry_id: UUID, user_id: CurrentUserId, request: Request
) -> Response:
    """Delete an entry."""
    container: AppContainer = request.app.state.container
    if not container.entry_service.delete_entry(user_id, entry_id):
        raise NotFoundError(_ENTRY_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
