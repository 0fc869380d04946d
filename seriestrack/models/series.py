"""Catalog series and per-user progress models."""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, field_validator


class SeriesStatus(str, Enum):
    """Progress status of a series on a user's list."""
    WATCHING = "watching"
    COMPLETED = "completed"
    ON_HOLD = "on_hold"
    DROPPED = "dropped"
    PLAN_TO_WATCH = "plan_to_watch"


# Status filter sentinel that matches every series, tracked or not
ALL_STATUSES = "all"


class Series(BaseModel):
    """Catalog series, shared read-only by all users."""
    id: str
    title: str
    description: Optional[str] = None
    genre: Optional[str] = None
    release_year: Optional[int] = None
    poster_url: Optional[str] = None
    imdb_rating: Optional[float] = None
    total_episodes: Optional[int] = None
    created_at: Optional[datetime] = None


class SeriesCreate(BaseModel):
    """Request model for adding a series to the catalog."""
    title: str = ""
    description: Optional[str] = None
    genre: Optional[str] = None
    release_year: Optional[int] = None
    poster_url: Optional[str] = None
    imdb_rating: Optional[float] = None
    total_episodes: Optional[int] = Field(default=None, ge=0)

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("description", "genre", "poster_url", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        """Trim optional text fields; empty input is stored as null."""
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v


class UserSeriesProgress(BaseModel):
    """A user's tracking state for one series (a ``user_series`` row)."""
    id: str
    user_id: str
    series_id: str
    current_episode: Optional[int] = 0
    status: SeriesStatus = SeriesStatus.PLAN_TO_WATCH
    rating: Optional[int] = None
    notes: Optional[str] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProgressCreate(BaseModel):
    """Request model for adding a series to the user's list."""
    status: SeriesStatus = SeriesStatus.PLAN_TO_WATCH


class EpisodeAdvance(BaseModel):
    """Request model for advancing progress.

    When ``episode`` is omitted the next episode is used.
    """
    episode: Optional[int] = None


class SeriesWithProgress(BaseModel):
    """A catalog series joined with the user's progress record, if any."""
    series: Series
    progress: Optional[UserSeriesProgress] = None


class SeriesCard(BaseModel):
    """Display-ready view of a series on the dashboard."""
    series: Series
    progress: Optional[UserSeriesProgress] = None
    status_label: Optional[str] = None
    progress_percent: Optional[float] = None
    next_episode: Optional[int] = None
    can_advance: bool = False
