"""Progress manager service for SeriesTrack."""

from datetime import datetime
from typing import List, Optional
from loguru import logger

from seriestrack.models.auth import SessionContext
from seriestrack.models.series import SeriesStatus, UserSeriesProgress
from seriestrack.services import view_model
from seriestrack.services.store import PROGRESS_TABLE, StoreClient


class ProgressManager:
    """Manages a user's per-series progress records."""

    def __init__(self, store: StoreClient):
        self.store = store

    async def list_progress(self, ctx: SessionContext) -> List[UserSeriesProgress]:
        """List the user's progress records."""
        result = await self.store.select(PROGRESS_TABLE, ctx)
        if not result.ok:
            raise result.error
        return [UserSeriesProgress(**row) for row in result.value]

    async def get_progress(self, ctx: SessionContext, progress_id: str) -> UserSeriesProgress:
        """Get a progress record by ID."""
        result = await self.store.get(PROGRESS_TABLE, ctx, progress_id)
        if not result.ok:
            raise result.error
        return UserSeriesProgress(**result.value)

    async def add_to_list(
        self,
        ctx: SessionContext,
        series_id: str,
        status: SeriesStatus = SeriesStatus.PLAN_TO_WATCH,
    ) -> UserSeriesProgress:
        """Start tracking a series for the current user."""
        result = await self.store.insert(PROGRESS_TABLE, ctx, {
            "series_id": series_id,
            "status": SeriesStatus(status).value,
            "user_id": ctx.user_id,
        })
        if not result.ok:
            raise result.error

        progress = UserSeriesProgress(**result.value)
        logger.info(f"User {ctx.user_id} added series {series_id} as {progress.status.value}")
        return progress

    async def advance_episode(
        self,
        ctx: SessionContext,
        progress: UserSeriesProgress,
        new_episode: int,
        total_episodes: Optional[int],
        now: Optional[datetime] = None,
    ) -> UserSeriesProgress:
        """Move progress to ``new_episode``, completing the series at the last one.

        Episode, status and completion stamp go out in one update; if it
        fails the stored record is left as it was.
        """
        changes = view_model.episode_changes(new_episode, total_episodes, now=now)

        result = await self.store.update(PROGRESS_TABLE, ctx, progress.id, changes)
        if not result.ok:
            raise result.error

        updated = UserSeriesProgress(**result.value)
        logger.info(
            f"Progress {progress.id}: episode {updated.current_episode} ({updated.status.value})"
        )
        return updated
