"""Water tracking endpoints."""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Query, Request, Response, status

from calorie_tracker.api.dependencies import CurrentUserId
from calorie_tracker.api.schemas import (
    LogWaterRequest,
    WaterEntryResponse,
    WaterSummaryResponse,
)

if TYPE_CHECKING:
    from calorie_tracker.containers import AppContainer

router = APIRouter(prefix="/water", tags=["water"])


@router.get("/summary")
async def water_summary(
    user_id: CurrentUserId,
    request: Request,
    day: date | None = Query(default=None, alias="date"),
) -> WaterSummaryResponse:
    """Return water intake for a day against the user's goal."""
    container: AppContainer = request.app.state.container
    target = day or datetime.now(tz=UTC).date()
    return WaterSummaryResponse.from_summary(
        container.water_service.summary(user_id, target)
    )


@router.post("/log")
async def log_water(
    payload: LogWaterRequest, user_id: CurrentUserId, request: Request
) -> WaterEntryResponse:
    """Record a glass of water."""
    container: AppContainer = request.app.state.container
    entry = container.water_service.log(user_id, payload.milliliters, payload.day)
    return WaterEntryResponse.from_entry(entry)


@router.delete(
    "/{entry_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response
)
async def delete_water(
    entry_id: UUID, user_id: CurrentUserId, request: Request
) -> Response:
    """Delete a water entry."""
    container: AppContainer = request.app.state.container
    container.water_service.delete(user_id, entry_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
