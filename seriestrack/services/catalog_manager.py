"""Catalog manager service for SeriesTrack."""

from typing import List
from loguru import logger

from seriestrack.errors import ValidationError
from seriestrack.models.auth import SessionContext
from seriestrack.models.series import Series, SeriesCreate
from seriestrack.services.store import SERIES_TABLE, StoreClient


class CatalogManager:
    """Reads and extends the shared series catalog."""

    def __init__(self, store: StoreClient):
        self.store = store

    async def list_series(self, ctx: SessionContext) -> List[Series]:
        """List the whole catalog, ordered by title."""
        result = await self.store.select(SERIES_TABLE, ctx, order_by="title")
        if not result.ok:
            raise result.error
        return [Series(**row) for row in result.value]

    async def get_series(self, ctx: SessionContext, series_id: str) -> Series:
        """Get a series by ID."""
        result = await self.store.get(SERIES_TABLE, ctx, series_id)
        if not result.ok:
            raise result.error
        return Series(**result.value)

    async def add_series(self, ctx: SessionContext, series_create: SeriesCreate) -> Series:
        """Add a new series to the catalog."""
        if not series_create.title:
            raise ValidationError("Title is required")

        result = await self.store.insert(
            SERIES_TABLE, ctx, series_create.model_dump(mode="json")
        )
        if not result.ok:
            raise result.error

        series = Series(**result.value)
        logger.info(f"Added series: {series.id} ({series.title})")
        return series
