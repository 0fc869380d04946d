"""Shared fixtures: an in-memory stand-in for the hosted tables."""

from typing import Any, Dict, List, Optional

import pytest
from fastapi.encoders import jsonable_encoder

from seriestrack.errors import NotFoundError, StoreError, StoreResult
from seriestrack.models.auth import SessionContext
from seriestrack.services.store import PROGRESS_TABLE, SERIES_TABLE, SESSIONS_TABLE


class FakeStore:
    """Implements the StoreClient interface over plain lists."""

    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {
            SERIES_TABLE: [],
            PROGRESS_TABLE: [],
            SESSIONS_TABLE: [],
        }
        self.calls: List[tuple] = []
        self.fail_with: Optional[StoreError] = None
        self._next_id = 1

    def seed(self, table: str, *rows: Dict[str, Any]) -> None:
        for row in rows:
            self.tables[table].append(jsonable_encoder(row))

    def _find(self, table: str, row_id: str) -> Optional[Dict[str, Any]]:
        for row in self.tables[table]:
            if row.get("id") == row_id:
                return row
        return None

    async def select(self, table, ctx, order_by=None, filters=None):
        self.calls.append(("select", table))
        if self.fail_with:
            return StoreResult.failure(self.fail_with)
        rows = [
            dict(row) for row in self.tables[table]
            if all(str(row.get(k)) == str(v) for k, v in (filters or {}).items())
        ]
        if order_by:
            rows.sort(key=lambda r: r[order_by])
        return StoreResult.success(rows)

    async def get(self, table, ctx, row_id):
        self.calls.append(("get", table))
        if self.fail_with:
            return StoreResult.failure(self.fail_with)
        row = self._find(table, row_id)
        if row is None:
            return StoreResult.failure(NotFoundError(f"No {table} record with id '{row_id}'"))
        return StoreResult.success(dict(row))

    async def insert(self, table, ctx, row):
        self.calls.append(("insert", table))
        if self.fail_with:
            return StoreResult.failure(self.fail_with)
        stored = jsonable_encoder(row)
        stored.setdefault("id", f"{table}-{self._next_id}")
        self._next_id += 1
        self.tables[table].append(stored)
        return StoreResult.success(dict(stored))

    async def update(self, table, ctx, row_id, changes):
        self.calls.append(("update", table))
        if self.fail_with:
            return StoreResult.failure(self.fail_with)
        row = self._find(table, row_id)
        if row is None:
            return StoreResult.failure(NotFoundError(f"No {table} record with id '{row_id}'"))
        row.update(jsonable_encoder(changes))
        return StoreResult.success(dict(row))

    def count(self, operation: str) -> int:
        return sum(1 for op, _ in self.calls if op == operation)


@pytest.fixture
def ctx():
    """Signed-in user context."""
    return SessionContext(user_id="user-1", email="viewer@example.com", access_token="token-1")


@pytest.fixture
def fake_store():
    """Empty in-memory store."""
    return FakeStore()


@pytest.fixture
def seeded_store(fake_store):
    """Store with a small catalog, progress records and sessions."""
    fake_store.seed(
        SERIES_TABLE,
        {"id": "s1", "title": "Foo", "genre": "Drama", "total_episodes": 12},
        {"id": "s2", "title": "Bar", "genre": "Comedy", "total_episodes": 8},
        {"id": "s3", "title": "Baz", "genre": None, "total_episodes": None},
    )
    fake_store.seed(
        PROGRESS_TABLE,
        {"id": "p1", "user_id": "user-1", "series_id": "s1", "current_episode": 11, "status": "watching"},
        {"id": "p3", "user_id": "user-1", "series_id": "s3", "current_episode": 4, "status": "on_hold"},
    )
    fake_store.seed(
        SESSIONS_TABLE,
        {"id": "w1", "user_id": "user-1", "series_id": "s1", "scheduled_date": "2024-01-01",
         "episode_number": 11, "status": "scheduled"},
        {"id": "w2", "user_id": "user-1", "series_id": "s2", "scheduled_date": "2024-01-03",
         "scheduled_time": "20:30:00", "episode_number": 1, "status": "scheduled"},
        {"id": "w3", "user_id": "user-1", "series_id": "s1", "scheduled_date": "2024-01-10",
         "episode_number": 12, "status": "completed"},
    )
    return fake_store
