"""Authentication context models."""

from typing import Optional
from pydantic import BaseModel


class SessionContext(BaseModel):
    """Authenticated user context passed explicitly to every backend call."""
    user_id: str
    access_token: str
    email: Optional[str] = None
    refresh_token: Optional[str] = None


class Credentials(BaseModel):
    """Email/password pair for the auth backend."""
    email: str
    password: str
