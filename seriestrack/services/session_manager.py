"""Watch session manager service for SeriesTrack."""

from typing import List, Union
from loguru import logger

from seriestrack.errors import InvalidTransitionError, ValidationError
from seriestrack.models.auth import SessionContext
from seriestrack.models.session import (
    SessionOutcome,
    SessionStatus,
    WatchSession,
    WatchSessionCreate,
)
from seriestrack.services import view_model
from seriestrack.services.store import SESSIONS_TABLE, StoreClient


class SessionManager:
    """Schedules watch sessions and records their outcome."""

    def __init__(self, store: StoreClient):
        self.store = store

    async def list_sessions(self, ctx: SessionContext) -> List[WatchSession]:
        """List the user's sessions, ordered by scheduled date."""
        result = await self.store.select(SESSIONS_TABLE, ctx, order_by="scheduled_date")
        if not result.ok:
            raise result.error
        return [WatchSession(**row) for row in result.value]

    async def get_session(self, ctx: SessionContext, session_id: str) -> WatchSession:
        """Get a session by ID."""
        result = await self.store.get(SESSIONS_TABLE, ctx, session_id)
        if not result.ok:
            raise result.error
        return WatchSession(**result.value)

    async def schedule_session(
        self,
        ctx: SessionContext,
        session_create: WatchSessionCreate,
    ) -> WatchSession:
        """Schedule a session to watch one episode of a series."""
        if not session_create.series_id:
            raise ValidationError("Series is required")
        if session_create.episode_number < 1:
            raise ValidationError("Episode number must be at least 1")

        row = session_create.model_dump(mode="json")
        row["status"] = SessionStatus.SCHEDULED.value
        row["user_id"] = ctx.user_id

        result = await self.store.insert(SESSIONS_TABLE, ctx, row)
        if not result.ok:
            raise result.error

        session = WatchSession(**result.value)
        logger.info(
            f"Scheduled session {session.id}: series {session.series_id} "
            f"episode {session.episode_number} on {session.scheduled_date}"
        )
        return session

    async def mark_session(
        self,
        ctx: SessionContext,
        session: WatchSession,
        outcome: Union[SessionOutcome, str],
    ) -> WatchSession:
        """Mark a scheduled session completed or skipped.

        Sessions that already have an outcome are rejected without a store
        call. Progress records are not touched.
        """
        try:
            changes = view_model.outcome_changes(session, outcome)
        except InvalidTransitionError:
            logger.warning(f"Rejected marking session {session.id} as {outcome}")
            raise

        result = await self.store.update(SESSIONS_TABLE, ctx, session.id, changes)
        if not result.ok:
            raise result.error

        updated = WatchSession(**result.value)
        logger.info(f"Session {session.id} marked {updated.status.value}")
        return updated
