"""Tests for SessionManager service."""

import pytest
from datetime import date

from seriestrack.errors import InvalidTransitionError, NotFoundError, StoreError, ValidationError
from seriestrack.models.session import SessionOutcome, SessionStatus, WatchSessionCreate
from seriestrack.services.session_manager import SessionManager
from seriestrack.services.store import PROGRESS_TABLE, SESSIONS_TABLE


@pytest.fixture
def session_manager(seeded_store):
    """Create a SessionManager over the seeded fake store."""
    return SessionManager(seeded_store)


class TestSessionManager:
    """Tests for SessionManager."""

    @pytest.mark.asyncio
    async def test_list_sessions_ordered_by_date(self, session_manager, ctx):
        sessions = await session_manager.list_sessions(ctx)
        assert [s.id for s in sessions] == ["w1", "w2", "w3"]

    @pytest.mark.asyncio
    async def test_schedule_session(self, session_manager, seeded_store, ctx):
        """Test scheduling stores a scheduled session for the current user."""
        session = await session_manager.schedule_session(ctx, WatchSessionCreate(
            series_id="s2",
            scheduled_date=date(2024, 2, 1),
            episode_number=2,
            notes=" with friends ",
        ))

        assert session.status == SessionStatus.SCHEDULED
        assert session.user_id == "user-1"
        assert session.notes == "with friends"
        stored = seeded_store.tables[SESSIONS_TABLE][-1]
        assert stored["scheduled_date"] == "2024-02-01"
        assert stored["scheduled_time"] is None

    @pytest.mark.asyncio
    async def test_schedule_rejects_episode_zero(self, session_manager, seeded_store, ctx):
        with pytest.raises(ValidationError):
            await session_manager.schedule_session(ctx, WatchSessionCreate(
                series_id="s2",
                scheduled_date=date(2024, 2, 1),
                episode_number=0,
            ))
        assert seeded_store.count("insert") == 0

    @pytest.mark.asyncio
    async def test_mark_completed(self, session_manager, ctx):
        session = await session_manager.get_session(ctx, "w1")

        updated = await session_manager.mark_session(ctx, session, SessionOutcome.COMPLETED)

        assert updated.status == SessionStatus.COMPLETED

    @pytest.mark.asyncio
    async def test_mark_twice_rejected(self, session_manager, seeded_store, ctx):
        """Test a completed session cannot be skipped afterwards."""
        session = await session_manager.get_session(ctx, "w1")
        completed = await session_manager.mark_session(ctx, session, "completed")

        with pytest.raises(InvalidTransitionError):
            await session_manager.mark_session(ctx, completed, "skipped")

        stored = await session_manager.get_session(ctx, "w1")
        assert stored.status == SessionStatus.COMPLETED
        assert seeded_store.count("update") == 1

    @pytest.mark.asyncio
    async def test_mark_does_not_touch_progress(self, session_manager, seeded_store, ctx):
        before = [dict(r) for r in seeded_store.tables[PROGRESS_TABLE]]
        session = await session_manager.get_session(ctx, "w1")

        await session_manager.mark_session(ctx, session, "completed")

        assert seeded_store.tables[PROGRESS_TABLE] == before

    @pytest.mark.asyncio
    async def test_mark_store_failure(self, session_manager, seeded_store, ctx):
        session = await session_manager.get_session(ctx, "w2")
        seeded_store.fail_with = StoreError("permission denied", status_code=403)

        with pytest.raises(StoreError):
            await session_manager.mark_session(ctx, session, "skipped")

    @pytest.mark.asyncio
    async def test_get_missing_session(self, session_manager, ctx):
        with pytest.raises(NotFoundError):
            await session_manager.get_session(ctx, "missing")
