"""Client for the hosted auth API (GoTrue over HTTP)."""

from typing import Any, Dict, Optional
import httpx
from loguru import logger

from seriestrack.config import settings
from seriestrack.errors import StoreError, StoreResult
from seriestrack.models.auth import Credentials, SessionContext
from seriestrack.services.store import error_message


MALFORMED_RESPONSE = "Malformed auth response"


def _context_from_session(body: Dict[str, Any]) -> Optional[SessionContext]:
    user = body.get("user") or {}
    if not user.get("id") or not body.get("access_token"):
        return None
    return SessionContext(
        user_id=user["id"],
        email=user.get("email"),
        access_token=body["access_token"],
        refresh_token=body.get("refresh_token"),
    )


class AuthClient:
    """Session lookup, sign-in, sign-up and sign-out against the auth backend."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url or settings.auth_url
        self.api_key = api_key if api_key is not None else settings.supabase_anon_key
        self.timeout = timeout or settings.request_timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is not None and self._client.is_closed:
            self._client = None
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
                headers={"apikey": self.api_key},
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def _call(
        self,
        method: str,
        path: str,
        access_token: Optional[str] = None,
        **kwargs,
    ) -> StoreResult[Dict[str, Any]]:
        headers = {}
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"
        try:
            client = await self._get_client()
            response = await client.request(method, path, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            logger.warning(f"Auth {method} {path} failed: {e}")
            return StoreResult.failure(StoreError(f"Could not reach the auth service: {e}"))

        if response.status_code >= 400:
            message = error_message(response)
            logger.warning(f"Auth {method} {path} returned {response.status_code}: {message}")
            return StoreResult.failure(StoreError(message, status_code=response.status_code))

        return StoreResult.success(response.json() if response.content else {})

    async def get_user(self, access_token: str) -> StoreResult[SessionContext]:
        """Resolve an access token to the signed-in user (session presence check)."""
        result = await self._call("GET", "/user", access_token=access_token)
        if not result.ok:
            return StoreResult.failure(result.error)
        user = result.value
        if not user.get("id"):
            return StoreResult.failure(StoreError(MALFORMED_RESPONSE))
        return StoreResult.success(SessionContext(
            user_id=user["id"],
            email=user.get("email"),
            access_token=access_token,
        ))

    async def sign_in(self, credentials: Credentials) -> StoreResult[SessionContext]:
        """Sign in with email and password."""
        result = await self._call(
            "POST",
            "/token",
            params={"grant_type": "password"},
            json=credentials.model_dump(),
        )
        if not result.ok:
            return StoreResult.failure(result.error)
        ctx = _context_from_session(result.value)
        if ctx is None:
            return StoreResult.failure(StoreError(MALFORMED_RESPONSE))
        logger.info(f"Signed in user {ctx.user_id}")
        return StoreResult.success(ctx)

    async def sign_up(
        self,
        credentials: Credentials,
        redirect_to: Optional[str] = None,
    ) -> StoreResult[Optional[SessionContext]]:
        """Register a new account.

        Returns None when the backend requires email confirmation before a
        session is issued.
        """
        params = {"redirect_to": redirect_to} if redirect_to else None
        result = await self._call("POST", "/signup", params=params, json=credentials.model_dump())
        if not result.ok:
            return StoreResult.failure(result.error)

        body = result.value
        if body.get("access_token"):
            ctx = _context_from_session(body)
            if ctx is None:
                return StoreResult.failure(StoreError(MALFORMED_RESPONSE))
            return StoreResult.success(ctx)
        logger.info(f"Sign-up pending email confirmation for {credentials.email}")
        return StoreResult.success(None)

    async def sign_out(self, ctx: SessionContext) -> StoreResult[None]:
        """Revoke the session behind ``ctx``."""
        result = await self._call("POST", "/logout", access_token=ctx.access_token)
        if not result.ok:
            return StoreResult.failure(result.error)
        logger.info(f"Signed out user {ctx.user_id}")
        return StoreResult.success(None)
