"""Nutrition metrics endpoints."""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import TYPE_CHECKING

from fastapi import APIRouter, Query, Request

from calorie_tracker.api.dependencies import CurrentUserId
from calorie_tracker.api.schemas import DailyMetricsResponse, RangeMetricsResponse

if TYPE_CHECKING:
    from calorie_tracker.containers import AppContainer

router = APIRouter(prefix="/metrics", tags=["metrics"])


@router.get("/daily")
async def daily_metrics(
    user_id: CurrentUserId,
    request: Request,
    day: date | None = Query(default=None, alias="date"),
) -> DailyMetricsResponse:
    """Return totals and entries for one UTC day, defaulting to today."""
    container: AppContainer = request.app.state.container
    target = day or datetime.now(tz=UTC).date()
    return DailyMetricsResponse.from_metrics(
        container.metrics_service.daily(user_id, target)
    )


@router.get("/range")
async def range_metrics(
    user_id: CurrentUserId,
    request: Request,
    start: date = Query(alias="from"),
    end: date = Query(alias="to"),
) -> RangeMetricsResponse:
    """Return totals, daily series and top foods for an inclusive date range."""
    container: AppContainer = request.app.state.container
    return RangeMetricsResponse.from_metrics(
        container.metrics_service.range(user_id, start, end)
    )
