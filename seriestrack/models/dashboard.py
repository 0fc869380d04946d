"""Dashboard snapshot model."""

from typing import Dict, List
from pydantic import BaseModel, Field

from .series import SeriesCard
from .session import WeekSchedule


class DashboardSnapshot(BaseModel):
    """Everything the dashboard shows, derived from one round of fetches."""
    cards: List[SeriesCard] = Field(default_factory=list)
    week: WeekSchedule
    status_counts: Dict[str, int] = Field(default_factory=dict)
