"""Progress API endpoints for SeriesTrack."""

from typing import List, Optional
from fastapi import APIRouter, Depends

from seriestrack.api.auth import get_session_context
from seriestrack.api.errors import http_error
from seriestrack.errors import TrackerError
from seriestrack.models.auth import SessionContext
from seriestrack.models.series import EpisodeAdvance, UserSeriesProgress
from seriestrack.services import view_model
from seriestrack.services.catalog_manager import CatalogManager
from seriestrack.services.progress_manager import ProgressManager


router = APIRouter(prefix="/progress", tags=["progress"])

# Manager instances - will be set by main.py
catalog_manager: CatalogManager = None
progress_manager: ProgressManager = None


def set_managers(cm: CatalogManager, pm: ProgressManager):
    """Set the manager instances."""
    global catalog_manager, progress_manager
    catalog_manager = cm
    progress_manager = pm


@router.get("", response_model=List[UserSeriesProgress])
async def list_progress(ctx: SessionContext = Depends(get_session_context)):
    """List the user's progress records."""
    try:
        return await progress_manager.list_progress(ctx)
    except TrackerError as e:
        raise http_error(e)


@router.post("/{progress_id}/advance", response_model=UserSeriesProgress)
async def advance_progress(
    progress_id: str,
    advance: Optional[EpisodeAdvance] = None,
    ctx: SessionContext = Depends(get_session_context),
):
    """Advance to an episode (the next one by default).

    Reaching the series' last episode marks it completed.
    """
    try:
        progress = await progress_manager.get_progress(ctx, progress_id)
        series = await catalog_manager.get_series(ctx, progress.series_id)

        episode = advance.episode if advance and advance.episode is not None else None
        if episode is None:
            episode = view_model.next_episode(progress)

        return await progress_manager.advance_episode(
            ctx, progress, episode, series.total_episodes
        )
    except TrackerError as e:
        raise http_error(e)
