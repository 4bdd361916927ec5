"""Failure conditions surfaced by focuslist operations.

None of these are retried internally; the HTTP layer maps each one to a
status code (see `focuslist.api.app`).
"""

import math
from typing import Optional


class EndpointError(Exception):
    """Base class for failures reported to the caller of an operation."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Unauthenticated(EndpointError):
    """No caller could be resolved from the request."""

    status_code = 401

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class RateLimited(EndpointError):
    """The rate limiter denied the operation; retriable after the hint."""

    status_code = 429

    def __init__(self, retry_after_ms: Optional[float]):
        self.retry_after_seconds = math.ceil((retry_after_ms or 0) / 1000)
        super().__init__(
            f"Rate limit exceeded. Please try again in {self.retry_after_seconds} seconds."
        )


class InvalidInput(EndpointError):
    """An input field failed validation."""

    status_code = 400

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class NotFound(EndpointError):
    """The addressed record does not exist."""

    status_code = 404


class NotAuthorized(EndpointError):
    """The addressed record exists but belongs to someone else, or the action is disabled."""

    status_code = 403


class DeliveryFailure(EndpointError):
    """The email collaborator failed; the notification record is already marked failed."""

    status_code = 502

    def __init__(self, message: str, notification_id: Optional[str] = None):
        super().__init__(message)
        self.notification_id = notification_id
