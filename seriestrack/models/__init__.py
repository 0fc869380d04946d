"""Data models for SeriesTrack."""

from .auth import SessionContext, Credentials
from .series import (
    ALL_STATUSES,
    Series,
    SeriesCard,
    SeriesCreate,
    SeriesStatus,
    SeriesWithProgress,
    UserSeriesProgress,
    ProgressCreate,
    EpisodeAdvance,
)
from .session import (
    DaySchedule,
    SessionMark,
    SessionOutcome,
    SessionState,
    SessionStatus,
    WatchSession,
    WatchSessionCreate,
    WeekSchedule,
)
from .dashboard import DashboardSnapshot

__all__ = [
    # Auth
    "SessionContext",
    "Credentials",
    # Series
    "ALL_STATUSES",
    "Series",
    "SeriesCard",
    "SeriesCreate",
    "SeriesStatus",
    "SeriesWithProgress",
    "UserSeriesProgress",
    "ProgressCreate",
    "EpisodeAdvance",
    # Sessions
    "DaySchedule",
    "SessionMark",
    "SessionOutcome",
    "SessionState",
    "SessionStatus",
    "WatchSession",
    "WatchSessionCreate",
    "WeekSchedule",
    # Dashboard
    "DashboardSnapshot",
]
