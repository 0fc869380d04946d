"""Services for SeriesTrack."""

from .store import StoreClient
from .auth import AuthClient
from .catalog_manager import CatalogManager
from .progress_manager import ProgressManager
from .session_manager import SessionManager
from .dashboard import DashboardService

__all__ = [
    # Backend clients
    "StoreClient",
    "AuthClient",
    # Managers
    "CatalogManager",
    "ProgressManager",
    "SessionManager",
    "DashboardService",
]
