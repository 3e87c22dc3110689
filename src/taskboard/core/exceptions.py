"""Domain errors raised by services and repositories.

Each error carries the HTTP status code the API layer renders it with.
Cache failures have no error type here: they degrade to a store read and
never surface to callers.
"""

from typing import Any


class TaskboardError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ValidationFailure(TaskboardError):
    """Malformed input or a uniqueness conflict."""

    status_code = 400


class UnauthorizedError(TaskboardError):
    """Missing, invalid or expired credential."""

    status_code = 401


class NotFoundError(TaskboardError):
    """A referenced entity does not exist in the store."""

    status_code = 404


class StoreUnavailableError(TaskboardError):
    """The persistent store failed to execute an operation."""

    status_code = 500
