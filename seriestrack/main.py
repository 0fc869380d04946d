"""SeriesTrack - FastAPI main application.

Personal TV series tracker: shared catalog, watchlist progress and a
calendar of scheduled watch sessions, stored in a hosted backend.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from seriestrack import __version__
from seriestrack.config import settings
from seriestrack.api import (
    auth_router,
    series_router,
    progress_router,
    sessions_router,
    dashboard_router,
    set_auth_client,
    set_series_managers,
    set_progress_managers,
    set_session_managers,
    set_dashboard_service,
)
from seriestrack.services.auth import AuthClient
from seriestrack.services.catalog_manager import CatalogManager
from seriestrack.services.dashboard import DashboardService
from seriestrack.services.progress_manager import ProgressManager
from seriestrack.services.session_manager import SessionManager
from seriestrack.services.store import StoreClient


# Backend clients
store_client: StoreClient = None
auth_client: AuthClient = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    global store_client, auth_client

    logger.info(f"Starting {settings.app_name} v{__version__}")
    logger.info(f"Backend: {settings.supabase_url}")
    if not settings.supabase_anon_key:
        logger.warning("SUPABASE_ANON_KEY is not set; backend requests will be rejected")

    store_client = StoreClient()
    auth_client = AuthClient()

    catalog_manager = CatalogManager(store_client)
    progress_manager = ProgressManager(store_client)
    session_manager = SessionManager(store_client)
    dashboard_service = DashboardService(catalog_manager, progress_manager, session_manager)

    # Set API module managers
    set_auth_client(auth_client)
    set_series_managers(catalog_manager, progress_manager, dashboard_service)
    set_progress_managers(catalog_manager, progress_manager)
    set_session_managers(session_manager, dashboard_service)
    set_dashboard_service(dashboard_service)

    yield

    await store_client.close()
    await auth_client.close()
    logger.info(f"{settings.app_name} stopped")


app = FastAPI(
    title=settings.app_name,
    description="Track TV series progress and schedule watch sessions",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(series_router)
app.include_router(progress_router)
app.include_router(sessions_router)
app.include_router(dashboard_router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": settings.app_name,
        "version": __version__,
        "status": "running",
        "features": ["catalog", "watchlist", "progress", "schedule"],
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "backend_configured": bool(settings.supabase_anon_key),
    }
