"""
Error types raised by services and routers.

Each error carries the HTTP status it maps to; `main.py` renders them as
`{"message": ..., **extra}` responses.
"""
from typing import Any, Optional

from fastapi import status


class ServiceError(Exception):
    """Base class for errors that map to an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, extra: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.extra = extra or {}

    def to_content(self) -> dict[str, Any]:
        return {"message": self.message, **self.extra}


class BadRequest(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST


class Unauthorized(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "unauthorized", extra: Optional[dict[str, Any]] = None):
        super().__init__(message, extra)


class Forbidden(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFound(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND


class UpstreamFailure(ServiceError):
    """The pizza factory did not accept an order."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
