"""Dashboard API endpoint for SeriesTrack."""

from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query

from seriestrack.api.auth import get_session_context
from seriestrack.api.errors import http_error
from seriestrack.api.series import check_status_filter
from seriestrack.errors import TrackerError
from seriestrack.models.auth import SessionContext
from seriestrack.models.dashboard import DashboardSnapshot
from seriestrack.models.series import ALL_STATUSES
from seriestrack.services.dashboard import DashboardService


router = APIRouter(prefix="/dashboard", tags=["dashboard"])

# Service instance - will be set by main.py
dashboard_service: DashboardService = None


def set_dashboard_service(service: DashboardService):
    """Set the dashboard service instance."""
    global dashboard_service
    dashboard_service = service


@router.get("", response_model=DashboardSnapshot)
async def get_dashboard(
    search: Optional[str] = Query(default=""),
    status: str = Query(default=ALL_STATUSES),
    anchor: Optional[date] = Query(default=None),
    ctx: SessionContext = Depends(get_session_context),
):
    """Series cards, this week's sessions and per-status counts in one call."""
    status = check_status_filter(status)
    try:
        return await dashboard_service.snapshot(ctx, search or "", status, anchor=anchor)
    except TrackerError as e:
        raise http_error(e)
