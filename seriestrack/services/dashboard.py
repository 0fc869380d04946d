"""Dashboard service: fetches in parallel, derives views with the view model."""

import asyncio
from datetime import date
from typing import List, Optional

from seriestrack.models.auth import SessionContext
from seriestrack.models.dashboard import DashboardSnapshot
from seriestrack.models.series import ALL_STATUSES, SeriesCard, SeriesWithProgress
from seriestrack.models.session import WeekSchedule
from seriestrack.services import view_model
from seriestrack.services.catalog_manager import CatalogManager
from seriestrack.services.progress_manager import ProgressManager
from seriestrack.services.session_manager import SessionManager


class DashboardService:
    """Builds dashboard views from independent fetches.

    The fetches have no ordering dependency, so they are issued together and
    joined once all of them have completed. Any failure is raised to the
    caller; nothing is cached between calls.
    """

    def __init__(
        self,
        catalog_manager: CatalogManager,
        progress_manager: ProgressManager,
        session_manager: SessionManager,
    ):
        self.catalog_manager = catalog_manager
        self.progress_manager = progress_manager
        self.session_manager = session_manager

    async def load_catalog(
        self,
        ctx: SessionContext,
        search_term: str = "",
        status_filter: str = ALL_STATUSES,
    ) -> List[SeriesWithProgress]:
        """Catalog joined with the user's progress, filtered."""
        series_list, progress_list = await asyncio.gather(
            self.catalog_manager.list_series(ctx),
            self.progress_manager.list_progress(ctx),
        )
        joined = view_model.join_progress(series_list, progress_list)
        return view_model.filter_series(joined, search_term, status_filter)

    async def cards(
        self,
        ctx: SessionContext,
        search_term: str = "",
        status_filter: str = ALL_STATUSES,
    ) -> List[SeriesCard]:
        items = await self.load_catalog(ctx, search_term, status_filter)
        return [view_model.describe(item) for item in items]

    async def week(
        self,
        ctx: SessionContext,
        anchor: Optional[date] = None,
        offset: int = 0,
        today: Optional[date] = None,
    ) -> WeekSchedule:
        """Sessions bucketed into the week ``offset`` weeks away from ``anchor``."""
        today = today or date.today()
        anchor = view_model.shift_week(anchor or today, offset)
        sessions = await self.session_manager.list_sessions(ctx)
        return view_model.week_schedule(anchor, sessions, today=today)

    async def snapshot(
        self,
        ctx: SessionContext,
        search_term: str = "",
        status_filter: str = ALL_STATUSES,
        anchor: Optional[date] = None,
        today: Optional[date] = None,
    ) -> DashboardSnapshot:
        """Full dashboard: series cards, the current week and status counts."""
        today = today or date.today()
        series_list, progress_list, sessions = await asyncio.gather(
            self.catalog_manager.list_series(ctx),
            self.progress_manager.list_progress(ctx),
            self.session_manager.list_sessions(ctx),
        )

        joined = view_model.join_progress(series_list, progress_list)
        filtered = view_model.filter_series(joined, search_term, status_filter)

        return DashboardSnapshot(
            cards=[view_model.describe(item) for item in filtered],
            week=view_model.week_schedule(anchor or today, sessions, today=today),
            status_counts=view_model.status_counts(joined),
        )
