"""API routers for SeriesTrack."""

from .auth import router as auth_router, set_auth_client, get_session_context
from .series import router as series_router, set_managers as set_series_managers
from .progress import router as progress_router, set_managers as set_progress_managers
from .sessions import router as sessions_router, set_managers as set_session_managers
from .dashboard import router as dashboard_router, set_dashboard_service

__all__ = [
    # Routers
    "auth_router",
    "series_router",
    "progress_router",
    "sessions_router",
    "dashboard_router",
    # Setup functions
    "set_auth_client",
    "set_series_managers",
    "set_progress_managers",
    "set_session_managers",
    "set_dashboard_service",
    # Dependencies
    "get_session_context",
]
