"""Conversion of SeriesTrack errors into HTTP responses."""

from fastapi import HTTPException

from seriestrack.errors import (
    AuthenticationError,
    InvalidTransitionError,
    NotFoundError,
    StoreError,
    TrackerError,
    ValidationError,
)


def http_error(error: TrackerError) -> HTTPException:
    """Map an error raised by a user action to the response the client shows."""
    if isinstance(error, ValidationError):
        return HTTPException(status_code=400, detail=error.message)
    if isinstance(error, AuthenticationError):
        return HTTPException(status_code=401, detail=error.message)
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=404, detail=error.message)
    if isinstance(error, InvalidTransitionError):
        return HTTPException(status_code=409, detail=error.message)
    if isinstance(error, StoreError):
        # Permission problems are reported as such; everything else is the backend's fault
        if error.status_code in (401, 403):
            return HTTPException(status_code=403, detail=error.message)
        return HTTPException(status_code=502, detail=error.message)
    return HTTPException(status_code=500, detail=error.message)
