"""Authentication API endpoints and the session-context dependency."""

from typing import Optional
from fastapi import APIRouter, Depends, Header, HTTPException
from loguru import logger

from seriestrack.api.errors import http_error
from seriestrack.errors import AuthenticationError
from seriestrack.models.auth import Credentials, SessionContext
from seriestrack.services.auth import AuthClient


router = APIRouter(prefix="/auth", tags=["auth"])

# Client instance - will be set by main.py
auth_client: AuthClient = None


def set_auth_client(client: AuthClient):
    """Set the auth client instance."""
    global auth_client
    auth_client = client


async def get_session_context(
    authorization: Optional[str] = Header(default=None),
) -> SessionContext:
    """Resolve the request's bearer token into a SessionContext."""
    if not authorization or not authorization.lower().startswith("bearer "):
        raise http_error(AuthenticationError("Not signed in"))

    token = authorization.split(" ", 1)[1].strip()
    result = await auth_client.get_user(token)
    if not result.ok:
        logger.debug(f"Rejected access token: {result.error.message}")
        raise http_error(AuthenticationError(result.error.message))
    return result.value


@router.get("/session", response_model=SessionContext)
async def current_session(ctx: SessionContext = Depends(get_session_context)):
    """Return the signed-in user's context."""
    return ctx


@router.post("/sign-in", response_model=SessionContext)
async def sign_in(credentials: Credentials):
    """Sign in with email and password."""
    if not credentials.email or not credentials.password:
        raise HTTPException(status_code=400, detail="Please fill in all fields")
    result = await auth_client.sign_in(credentials)
    if not result.ok:
        if result.error.status_code in (400, 401):
            raise http_error(AuthenticationError(result.error.message))
        raise http_error(result.error)
    return result.value


@router.post("/sign-up")
async def sign_up(credentials: Credentials, redirect_to: Optional[str] = None):
    """Create an account. The session is only returned if no confirmation is needed."""
    if not credentials.email or not credentials.password:
        raise HTTPException(status_code=400, detail="Please fill in all fields")
    result = await auth_client.sign_up(credentials, redirect_to=redirect_to)
    if not result.ok:
        raise http_error(result.error)
    if result.value is None:
        return {"message": "Check your email to confirm your account", "session": None}
    return {"message": "Account created", "session": result.value.model_dump()}


@router.post("/sign-out")
async def sign_out(ctx: SessionContext = Depends(get_session_context)):
    """Sign out the current session."""
    result = await auth_client.sign_out(ctx)
    if not result.ok:
        raise http_error(result.error)
    return {"message": "Signed out"}
