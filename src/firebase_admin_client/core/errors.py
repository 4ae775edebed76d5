"""Error codes and exception types."""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Platform-wide error kinds shared by every Firebase API."""

    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    UNAUTHENTICATED = "UNAUTHENTICATED"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    RESOURCE_EXHAUSTED = "RESOURCE_EXHAUSTED"
    INTERNAL = "INTERNAL"
    UNAVAILABLE = "UNAVAILABLE"
    UNKNOWN = "UNKNOWN"


class FirebaseError(Exception):
    """Base exception for this package."""

    def __init__(
        self,
        message: str,
        *,
        code: ErrorCode = ErrorCode.UNKNOWN,
        http_status: int | None = None,
        response_body: str | None = None,
        cause: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.http_status = http_status
        self.response_body = response_body
        self.cause = cause


class FirebaseTransportError(FirebaseError):
    """Network/transport-level failure."""


class FirebaseClientClosedError(FirebaseError):
    """Raised when client is used after close."""


__all__ = [
    "ErrorCode",
    "FirebaseError",
    "FirebaseTransportError",
    "FirebaseClientClosedError",
]
