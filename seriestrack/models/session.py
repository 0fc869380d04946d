"""Watch session and calendar models."""

from datetime import date, datetime, time
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator


class SessionStatus(str, Enum):
    """Stored status of a watch session."""
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    SKIPPED = "skipped"


class SessionOutcome(str, Enum):
    """Terminal outcomes a scheduled session can be marked with."""
    COMPLETED = "completed"
    SKIPPED = "skipped"


class SessionState(str, Enum):
    """Display classification of a session relative to today."""
    UPCOMING = "upcoming"
    TODAY = "today"
    OVERDUE = "overdue"
    COMPLETED = "completed"
    SKIPPED = "skipped"


class WatchSession(BaseModel):
    """A scheduled intent to watch one episode (a ``watch_sessions`` row)."""
    id: str
    user_id: str
    series_id: str
    scheduled_date: date
    scheduled_time: Optional[time] = None
    episode_number: int = 1
    status: SessionStatus = SessionStatus.SCHEDULED
    notes: Optional[str] = None
    created_at: Optional[datetime] = None


class WatchSessionCreate(BaseModel):
    """Request model for scheduling a watch session."""
    series_id: str
    scheduled_date: date
    scheduled_time: Optional[time] = None
    episode_number: int = 1
    notes: Optional[str] = None

    @field_validator("scheduled_time", mode="before")
    @classmethod
    def blank_time_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("notes", mode="before")
    @classmethod
    def strip_notes(cls, v):
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v


class SessionMark(BaseModel):
    """Request model for marking a session."""
    outcome: SessionOutcome


class DaySchedule(BaseModel):
    """Sessions scheduled on one calendar day."""
    day: date
    is_today: bool = False
    sessions: List[WatchSession] = Field(default_factory=list)


class WeekSchedule(BaseModel):
    """A Monday-first calendar week of sessions."""
    anchor: date
    start: date
    end: date
    days: List[DaySchedule] = Field(default_factory=list)

    @property
    def session_count(self) -> int:
        return sum(len(d.sessions) for d in self.days)
