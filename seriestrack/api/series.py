"""Catalog API endpoints for SeriesTrack."""

from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from loguru import logger

from seriestrack.api.auth import get_session_context
from seriestrack.api.errors import http_error
from seriestrack.errors import TrackerError
from seriestrack.models.auth import SessionContext
from seriestrack.models.series import (
    ALL_STATUSES,
    ProgressCreate,
    Series,
    SeriesCard,
    SeriesCreate,
    SeriesStatus,
    UserSeriesProgress,
)
from seriestrack.services.catalog_manager import CatalogManager
from seriestrack.services.dashboard import DashboardService
from seriestrack.services.progress_manager import ProgressManager


router = APIRouter(prefix="/series", tags=["series"])

# Manager instances - will be set by main.py
catalog_manager: CatalogManager = None
progress_manager: ProgressManager = None
dashboard_service: DashboardService = None


def set_managers(cm: CatalogManager, pm: ProgressManager, ds: DashboardService):
    """Set the manager instances."""
    global catalog_manager, progress_manager, dashboard_service
    catalog_manager = cm
    progress_manager = pm
    dashboard_service = ds


def check_status_filter(status: str) -> str:
    valid = {ALL_STATUSES} | {s.value for s in SeriesStatus}
    if status not in valid:
        raise HTTPException(status_code=400, detail=f"Unknown status filter '{status}'")
    return status


@router.get("", response_model=List[SeriesCard])
async def list_series(
    search: Optional[str] = Query(default="", description="Match against title or genre"),
    status: str = Query(default=ALL_STATUSES, description="Progress status, or 'all'"),
    ctx: SessionContext = Depends(get_session_context),
):
    """List the catalog with the user's progress, filtered."""
    status = check_status_filter(status)
    try:
        return await dashboard_service.cards(ctx, search or "", status)
    except TrackerError as e:
        raise http_error(e)


@router.post("", response_model=Series)
async def add_series(
    series_create: SeriesCreate,
    ctx: SessionContext = Depends(get_session_context),
):
    """Add a series to the shared catalog."""
    try:
        return await catalog_manager.add_series(ctx, series_create)
    except TrackerError as e:
        raise http_error(e)
    except Exception as e:
        logger.error(f"Failed to add series: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{series_id}", response_model=Series)
async def get_series(series_id: str, ctx: SessionContext = Depends(get_session_context)):
    """Get a specific series by ID."""
    try:
        return await catalog_manager.get_series(ctx, series_id)
    except TrackerError as e:
        raise http_error(e)


@router.post("/{series_id}/track", response_model=UserSeriesProgress)
async def track_series(
    series_id: str,
    progress_create: Optional[ProgressCreate] = None,
    ctx: SessionContext = Depends(get_session_context),
):
    """Add a series to the user's list."""
    status = progress_create.status if progress_create else SeriesStatus.PLAN_TO_WATCH
    try:
        return await progress_manager.add_to_list(ctx, series_id, status)
    except TrackerError as e:
        raise http_error(e)
