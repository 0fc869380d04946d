"""Fixtures for router tests: a FastAPI app wired to the fake store."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from seriestrack.api import (
    auth_router,
    dashboard_router,
    get_session_context,
    progress_router,
    series_router,
    sessions_router,
    set_dashboard_service,
    set_progress_managers,
    set_series_managers,
    set_session_managers,
)
from seriestrack.services.catalog_manager import CatalogManager
from seriestrack.services.dashboard import DashboardService
from seriestrack.services.progress_manager import ProgressManager
from seriestrack.services.session_manager import SessionManager


@pytest.fixture
def client(seeded_store, ctx):
    """Create a test client with all routers and a signed-in user."""
    catalog_manager = CatalogManager(seeded_store)
    progress_manager = ProgressManager(seeded_store)
    session_manager = SessionManager(seeded_store)
    dashboard_service = DashboardService(catalog_manager, progress_manager, session_manager)

    app = FastAPI()
    app.include_router(auth_router)
    app.include_router(series_router)
    app.include_router(progress_router)
    app.include_router(sessions_router)
    app.include_router(dashboard_router)

    # Set up module-level dependencies
    set_series_managers(catalog_manager, progress_manager, dashboard_service)
    set_progress_managers(catalog_manager, progress_manager)
    set_session_managers(session_manager, dashboard_service)
    set_dashboard_service(dashboard_service)
    app.dependency_overrides[get_session_context] = lambda: ctx

    return TestClient(app)
