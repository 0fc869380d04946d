"""Session/progress view model.

Pure derivations over already-fetched records: calendar weeks, per-day
session lists, progress percentages, the catalog/progress join and the two
state transitions. Nothing here talks to the backend, so every function
gives the same answer for the same inputs and can be tested without a
network.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional, Union

from seriestrack.errors import InvalidTransitionError, ValidationError
from seriestrack.models.series import (
    ALL_STATUSES,
    SeriesCard,
    SeriesStatus,
    SeriesWithProgress,
    Series,
    UserSeriesProgress,
)
from seriestrack.models.session import (
    DaySchedule,
    SessionOutcome,
    SessionState,
    SessionStatus,
    WatchSession,
    WeekSchedule,
)

DateLike = Union[date, datetime]

STATUS_LABELS = {
    SeriesStatus.PLAN_TO_WATCH: "Plan to Watch",
    SeriesStatus.ON_HOLD: "On Hold",
}


def _as_date(value: DateLike) -> date:
    """Calendar day of a date or datetime (local components, no tz shift)."""
    if isinstance(value, datetime):
        return value.date()
    return value


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ============ Progress ============

def _total_known(total_episodes: Optional[int]) -> bool:
    # A missing or zero episode count means the series length is unknown
    return bool(total_episodes) and total_episodes > 0


def episode_changes(
    new_episode: int,
    total_episodes: Optional[int],
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Build the field changes for moving a progress record to ``new_episode``.

    The result is meant to be sent as one update so the episode, status and
    completion stamp change together. Any stamp from an earlier completion is
    cleared when the record is no longer complete.
    """
    if isinstance(new_episode, bool) or not isinstance(new_episode, int) or new_episode < 1:
        raise ValidationError("Episode number must be a positive integer")

    now = now or _utcnow()
    completed = _total_known(total_episodes) and new_episode >= total_episodes

    changes: Dict[str, Any] = {
        "current_episode": new_episode,
        "status": SeriesStatus.COMPLETED if completed else SeriesStatus.WATCHING,
        "updated_at": now,
        "completed_at": now if completed else None,
    }
    return changes


def advance_episode(
    progress: UserSeriesProgress,
    new_episode: int,
    total_episodes: Optional[int],
    now: Optional[datetime] = None,
) -> UserSeriesProgress:
    """Return ``progress`` as it looks after advancing to ``new_episode``.

    Going back to a lower episode is allowed.
    """
    changes = episode_changes(new_episode, total_episodes, now=now)
    return progress.model_copy(update=changes)


def next_episode(progress: Optional[UserSeriesProgress]) -> int:
    """Episode number the user would watch next."""
    if progress is None:
        return 1
    return (progress.current_episode or 0) + 1


def progress_percent(
    progress: Optional[UserSeriesProgress],
    total_episodes: Optional[int],
) -> Optional[float]:
    """Share of episodes watched, 0-100, or None when the length is unknown."""
    if progress is None or not _total_known(total_episodes):
        return None
    watched = progress.current_episode or 0
    return min(100.0, watched / total_episodes * 100)


def status_label(status: SeriesStatus) -> str:
    """Human-readable name for a progress status."""
    status = SeriesStatus(status)
    if status in STATUS_LABELS:
        return STATUS_LABELS[status]
    return status.value.capitalize()


def can_advance(progress: Optional[UserSeriesProgress]) -> bool:
    """Only series currently being watched offer the next-episode action."""
    return progress is not None and progress.status == SeriesStatus.WATCHING


def describe(item: SeriesWithProgress) -> SeriesCard:
    """Turn a joined series into a display card."""
    progress = item.progress
    total = item.series.total_episodes
    return SeriesCard(
        series=item.series,
        progress=progress,
        status_label=status_label(progress.status) if progress else None,
        progress_percent=progress_percent(progress, total),
        next_episode=next_episode(progress) if progress else None,
        can_advance=can_advance(progress),
    )


def status_counts(items: Iterable[SeriesWithProgress]) -> Dict[str, int]:
    """Count tracked series per progress status."""
    counts = {status.value: 0 for status in SeriesStatus}
    for item in items:
        if item.progress is not None:
            counts[SeriesStatus(item.progress.status).value] += 1
    return counts


# ============ Sessions ============

def outcome_changes(session: WatchSession, outcome: Union[SessionOutcome, str]) -> Dict[str, Any]:
    """Build the field changes for marking a scheduled session.

    Raises InvalidTransitionError unless the session is still scheduled;
    completed and skipped sessions are final.
    """
    try:
        outcome = SessionOutcome(outcome)
    except ValueError:
        raise ValidationError(f"Unknown session outcome: {outcome!r}")

    if session.status != SessionStatus.SCHEDULED:
        raise InvalidTransitionError(
            f"Session {session.id} is already {SessionStatus(session.status).value}"
        )
    return {"status": SessionStatus(outcome.value)}


def mark_session(session: WatchSession, outcome: Union[SessionOutcome, str]) -> WatchSession:
    """Return ``session`` as it looks after being marked with ``outcome``."""
    return session.model_copy(update=outcome_changes(session, outcome))


def classify_session(session: WatchSession, today: Optional[date] = None) -> SessionState:
    """Classify a session for display relative to ``today``."""
    if session.status == SessionStatus.COMPLETED:
        return SessionState.COMPLETED
    if session.status == SessionStatus.SKIPPED:
        return SessionState.SKIPPED

    today = _as_date(today) if today else date.today()
    day = _as_date(session.scheduled_date)
    if day < today:
        return SessionState.OVERDUE
    if day == today:
        return SessionState.TODAY
    return SessionState.UPCOMING


# ============ Calendar ============

def week_of(anchor: DateLike) -> List[date]:
    """The seven days (Monday first) of the week containing ``anchor``."""
    anchor = _as_date(anchor)
    start = anchor - timedelta(days=anchor.weekday())
    return [start + timedelta(days=i) for i in range(7)]


def shift_week(anchor: DateLike, delta_weeks: int) -> DateLike:
    """Move ``anchor`` by whole weeks, forward or backward."""
    return anchor + timedelta(days=7 * delta_weeks)


def sessions_on(day: DateLike, sessions: Iterable[WatchSession]) -> List[WatchSession]:
    """Sessions scheduled on the same calendar day, in input order."""
    day = _as_date(day)
    return [s for s in sessions if _as_date(s.scheduled_date) == day]


def week_schedule(
    anchor: DateLike,
    sessions: Iterable[WatchSession],
    today: Optional[date] = None,
) -> WeekSchedule:
    """Bucket sessions into the calendar week containing ``anchor``."""
    sessions = list(sessions)
    today = _as_date(today) if today else date.today()
    days = week_of(anchor)

    return WeekSchedule(
        anchor=_as_date(anchor),
        start=days[0],
        end=days[-1],
        days=[
            DaySchedule(day=d, is_today=(d == today), sessions=sessions_on(d, sessions))
            for d in days
        ],
    )


# ============ Catalog ============

def join_progress(
    series_list: Iterable[Series],
    progress_list: Iterable[UserSeriesProgress],
) -> List[SeriesWithProgress]:
    """Left outer join of catalog series with the user's progress records.

    Series order is preserved. If several records point at the same series
    the first one wins.
    """
    by_series: Dict[str, UserSeriesProgress] = {}
    for progress in progress_list:
        by_series.setdefault(progress.series_id, progress)

    return [
        SeriesWithProgress(series=series, progress=by_series.get(series.id))
        for series in series_list
    ]


def _matches_search(item: SeriesWithProgress, term: str) -> bool:
    if term in item.series.title.lower():
        return True
    return bool(item.series.genre) and term in item.series.genre.lower()


def filter_series(
    items: Iterable[SeriesWithProgress],
    search_term: Optional[str] = "",
    status_filter: Union[SeriesStatus, str, None] = ALL_STATUSES,
) -> List[SeriesWithProgress]:
    """Filter joined series by search term (title or genre) and status.

    Both conditions must hold. Series the user does not track only pass the
    ``"all"`` status filter.
    """
    result = list(items)

    if search_term:
        term = search_term.lower()
        result = [item for item in result if _matches_search(item, term)]

    if status_filter and status_filter != ALL_STATUSES:
        result = [
            item for item in result
            if item.progress is not None and item.progress.status == status_filter
        ]

    return result
