"""Tests for ProgressManager service."""

import pytest
from datetime import datetime, timezone

from seriestrack.errors import NotFoundError, StoreError, ValidationError
from seriestrack.models.series import SeriesStatus
from seriestrack.services.progress_manager import ProgressManager
from seriestrack.services.store import PROGRESS_TABLE


NOW = datetime(2024, 1, 5, 21, 0, tzinfo=timezone.utc)


@pytest.fixture
def progress_manager(seeded_store):
    """Create a ProgressManager over the seeded fake store."""
    return ProgressManager(seeded_store)


class TestProgressManager:
    """Tests for ProgressManager."""

    @pytest.mark.asyncio
    async def test_list_progress(self, progress_manager, ctx):
        records = await progress_manager.list_progress(ctx)
        assert {r.id for r in records} == {"p1", "p3"}

    @pytest.mark.asyncio
    async def test_add_to_list(self, progress_manager, seeded_store, ctx):
        """Test tracking a series defaults to plan to watch."""
        progress = await progress_manager.add_to_list(ctx, "s2")

        assert progress.series_id == "s2"
        assert progress.user_id == "user-1"
        assert progress.status == SeriesStatus.PLAN_TO_WATCH
        assert len(seeded_store.tables[PROGRESS_TABLE]) == 3

    @pytest.mark.asyncio
    async def test_add_to_list_with_status(self, progress_manager, ctx):
        progress = await progress_manager.add_to_list(ctx, "s2", SeriesStatus.WATCHING)
        assert progress.status == SeriesStatus.WATCHING

    @pytest.mark.asyncio
    async def test_advance_to_last_episode_completes(self, progress_manager, seeded_store, ctx):
        """Test episode 12 of 12 completes in a single update."""
        progress = await progress_manager.get_progress(ctx, "p1")

        updated = await progress_manager.advance_episode(ctx, progress, 12, 12, now=NOW)

        assert updated.status == SeriesStatus.COMPLETED
        assert updated.current_episode == 12
        assert updated.completed_at == NOW
        assert seeded_store.count("update") == 1

    @pytest.mark.asyncio
    async def test_advance_with_unknown_total(self, progress_manager, ctx):
        progress = await progress_manager.get_progress(ctx, "p3")

        updated = await progress_manager.advance_episode(ctx, progress, 99, None, now=NOW)

        assert updated.status == SeriesStatus.WATCHING
        assert updated.completed_at is None

    @pytest.mark.asyncio
    async def test_going_back_clears_completion(self, progress_manager, seeded_store, ctx):
        """Test the stored completion stamp is cleared by the same update."""
        seeded_store.seed(PROGRESS_TABLE, {
            "id": "p2", "user_id": "user-1", "series_id": "s2", "current_episode": 8,
            "status": "completed", "completed_at": "2024-01-01T00:00:00+00:00",
        })
        progress = await progress_manager.get_progress(ctx, "p2")

        updated = await progress_manager.advance_episode(ctx, progress, 3, 8, now=NOW)

        assert updated.status == SeriesStatus.WATCHING
        assert updated.completed_at is None
        assert seeded_store.count("update") == 1
        stored = await progress_manager.get_progress(ctx, "p2")
        assert stored.completed_at is None
        assert stored.status == SeriesStatus.WATCHING

    @pytest.mark.asyncio
    async def test_invalid_episode_skips_store(self, progress_manager, seeded_store, ctx):
        """Test validation happens before any store call."""
        progress = await progress_manager.get_progress(ctx, "p1")

        with pytest.raises(ValidationError):
            await progress_manager.advance_episode(ctx, progress, 0, 12)

        assert seeded_store.count("update") == 0

    @pytest.mark.asyncio
    async def test_failed_write_leaves_record(self, progress_manager, seeded_store, ctx):
        """Test a store failure surfaces and the stored record is unchanged."""
        progress = await progress_manager.get_progress(ctx, "p1")
        seeded_store.fail_with = StoreError("network down")

        with pytest.raises(StoreError, match="network down"):
            await progress_manager.advance_episode(ctx, progress, 12, 12)

        seeded_store.fail_with = None
        stored = await progress_manager.get_progress(ctx, "p1")
        assert stored.current_episode == 11
        assert stored.status == SeriesStatus.WATCHING

    @pytest.mark.asyncio
    async def test_get_missing_progress(self, progress_manager, ctx):
        with pytest.raises(NotFoundError):
            await progress_manager.get_progress(ctx, "missing")
