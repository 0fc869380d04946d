"""Client for the hosted table REST API (PostgREST over HTTP).

Three collections are used: ``series``, ``user_series`` and
``watch_sessions``. Every call returns a StoreResult; the client never
raises for backend failures, callers decide what to do with the error.
"""

from typing import Any, Dict, List, Optional
import httpx
from fastapi.encoders import jsonable_encoder
from loguru import logger

from seriestrack.config import settings
from seriestrack.errors import NotFoundError, StoreError, StoreResult
from seriestrack.models.auth import SessionContext

SERIES_TABLE = "series"
PROGRESS_TABLE = "user_series"
SESSIONS_TABLE = "watch_sessions"

Row = Dict[str, Any]


def error_message(response: httpx.Response) -> str:
    """Pull a readable message out of an error response."""
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict):
        for key in ("message", "msg", "error_description", "error"):
            if body.get(key):
                return str(body[key])
    return f"HTTP {response.status_code}"


class StoreClient:
    """Async client for the row-level-secured tables.

    The caller's SessionContext supplies the bearer token for each request,
    so the backend applies that user's row-level policies.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url or settings.rest_url
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
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    def _headers(self, ctx: SessionContext, returning: bool = False) -> Dict[str, str]:
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {ctx.access_token}",
        }
        if returning:
            headers["Prefer"] = "return=representation"
        return headers

    async def _request(
        self,
        method: str,
        table: str,
        ctx: SessionContext,
        params: Optional[Dict[str, str]] = None,
        payload: Optional[Row] = None,
    ) -> StoreResult[List[Row]]:
        """Send one request and wrap the outcome."""
        try:
            client = await self._get_client()
            response = await client.request(
                method,
                f"/{table}",
                params=params,
                json=jsonable_encoder(payload) if payload is not None else None,
                headers=self._headers(ctx, returning=method != "GET"),
            )
        except httpx.HTTPError as e:
            logger.warning(f"Store {method} {table} failed: {e}")
            return StoreResult.failure(StoreError(f"Could not reach the backend: {e}"))

        if response.status_code >= 400:
            message = error_message(response)
            logger.warning(f"Store {method} {table} returned {response.status_code}: {message}")
            return StoreResult.failure(StoreError(message, status_code=response.status_code))

        logger.debug(f"Store {method} {table} -> {response.status_code}")
        if not response.content:
            return StoreResult.success([])
        return StoreResult.success(response.json())

    async def select(
        self,
        table: str,
        ctx: SessionContext,
        order_by: Optional[str] = None,
        filters: Optional[Dict[str, Any]] = None,
    ) -> StoreResult[List[Row]]:
        """Select all visible rows, optionally filtered by equality and ordered."""
        params = {"select": "*"}
        if order_by:
            params["order"] = f"{order_by}.asc"
        for field, value in (filters or {}).items():
            params[field] = f"eq.{value}"
        return await self._request("GET", table, ctx, params=params)

    async def get(self, table: str, ctx: SessionContext, row_id: str) -> StoreResult[Row]:
        """Fetch one row by id."""
        result = await self.select(table, ctx, filters={"id": row_id})
        if not result.ok:
            return StoreResult.failure(result.error)
        if not result.value:
            return StoreResult.failure(NotFoundError(f"No {table} record with id '{row_id}'"))
        return StoreResult.success(result.value[0])

    async def insert(self, table: str, ctx: SessionContext, row: Row) -> StoreResult[Row]:
        """Insert one row and return it as stored."""
        result = await self._request("POST", table, ctx, payload=row)
        if not result.ok:
            return StoreResult.failure(result.error)
        rows = result.value
        return StoreResult.success(rows[0] if rows else dict(row))

    async def update(
        self,
        table: str,
        ctx: SessionContext,
        row_id: str,
        changes: Row,
    ) -> StoreResult[Row]:
        """Apply ``changes`` to one row in a single request."""
        result = await self._request(
            "PATCH", table, ctx, params={"id": f"eq.{row_id}"}, payload=changes
        )
        if not result.ok:
            return StoreResult.failure(result.error)
        if not result.value:
            return StoreResult.failure(NotFoundError(f"No {table} record with id '{row_id}'"))
        return StoreResult.success(result.value[0])
