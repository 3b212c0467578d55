"""Base service exceptions.

These exceptions are raised by the service layer and should be caught
by the API layer and converted to appropriate HTTP responses.
"""

from typing import Any


class ServiceError(Exception):
    """Base service exception."""

    pass


class NotFoundError(ServiceError):
    """Resource not found."""

    pass


class ValidationError(ServiceError):
    """Validation error."""

    pass


class RecordValidationError(ValidationError):
    """The record store rejected a payload for reasons unrelated to uniqueness.

    `details` holds one entry per offending field:
    {"field": "quantity", "message": "Input should be greater than or equal to 0", "kind": "greater_than_equal"}
    """

    def __init__(self, details: list[dict[str, Any]], message: str = "Validation failed"):
        self.details = details
        super().__init__(message)
