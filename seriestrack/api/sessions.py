"""Watch session API endpoints for SeriesTrack."""

from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, Query

from seriestrack.api.auth import get_session_context
from seriestrack.api.errors import http_error
from seriestrack.errors import TrackerError
from seriestrack.models.auth import SessionContext
from seriestrack.models.session import (
    SessionMark,
    WatchSession,
    WatchSessionCreate,
    WeekSchedule,
)
from seriestrack.services import view_model
from seriestrack.services.dashboard import DashboardService
from seriestrack.services.session_manager import SessionManager


router = APIRouter(prefix="/sessions", tags=["sessions"])

# Manager instances - will be set by main.py
session_manager: SessionManager = None
dashboard_service: DashboardService = None


def set_managers(sm: SessionManager, ds: DashboardService):
    """Set the manager instances."""
    global session_manager, dashboard_service
    session_manager = sm
    dashboard_service = ds


@router.get("", response_model=List[WatchSession])
async def list_sessions(ctx: SessionContext = Depends(get_session_context)):
    """List all of the user's sessions, by scheduled date."""
    try:
        return await session_manager.list_sessions(ctx)
    except TrackerError as e:
        raise http_error(e)


@router.get("/week", response_model=WeekSchedule)
async def get_week(
    anchor: Optional[date] = Query(default=None, description="Any day in the week; defaults to today"),
    offset: int = Query(default=0, description="Weeks to move forward (positive) or back (negative)"),
    ctx: SessionContext = Depends(get_session_context),
):
    """Sessions for one Monday-first calendar week."""
    try:
        return await dashboard_service.week(ctx, anchor=anchor, offset=offset)
    except TrackerError as e:
        raise http_error(e)


@router.get("/day/{day}", response_model=List[WatchSession])
async def get_day(day: date, ctx: SessionContext = Depends(get_session_context)):
    """Sessions scheduled on one calendar day."""
    try:
        sessions = await session_manager.list_sessions(ctx)
    except TrackerError as e:
        raise http_error(e)
    return view_model.sessions_on(day, sessions)


@router.post("", response_model=WatchSession)
async def schedule_session(
    session_create: WatchSessionCreate,
    ctx: SessionContext = Depends(get_session_context),
):
    """Schedule a watch session."""
    try:
        return await session_manager.schedule_session(ctx, session_create)
    except TrackerError as e:
        raise http_error(e)


@router.post("/{session_id}/mark", response_model=WatchSession)
async def mark_session(
    session_id: str,
    mark: SessionMark,
    ctx: SessionContext = Depends(get_session_context),
):
    """Mark a scheduled session completed or skipped."""
    try:
        session = await session_manager.get_session(ctx, session_id)
        return await session_manager.mark_session(ctx, session, mark.outcome)
    except TrackerError as e:
        raise http_error(e)
