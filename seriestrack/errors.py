"""Error types and backend call results for SeriesTrack."""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class TrackerError(Exception):
    """Base class for all SeriesTrack errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TrackerError):
    """Invalid or missing input, detected before any backend call."""


class InvalidTransitionError(TrackerError):
    """A state transition was requested from a state that does not allow it."""


class AuthenticationError(TrackerError):
    """No session, or the access token was rejected."""


class StoreError(TrackerError):
    """A request to the hosted backend failed.

    Network errors, authorization failures and constraint violations all
    collapse into this one category. ``status_code`` is None when no HTTP
    response was received.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(StoreError):
    """The referenced record does not exist (or is not visible to the user)."""

    def __init__(self, message: str):
        super().__init__(message, status_code=404)


@dataclass
class StoreResult(Generic[T]):
    """Outcome of a backend call: either a value or a StoreError.

    Callers must check ``ok`` (or call ``unwrap``) before using ``value``.
    """

    value: Optional[T] = None
    error: Optional[StoreError] = None

    @classmethod
    def success(cls, value: T) -> "StoreResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: StoreError) -> "StoreResult[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.value
