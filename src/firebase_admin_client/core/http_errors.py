"""HTTP error classification.

Classification is a two-stage pipeline. ``extract_http_error_info`` maps the
raw HTTP status to an :class:`ErrorCode` and builds a diagnostic message.
``apply_platform_error`` then refines that result with the structured
``{"error": {"status": ..., "message": ...}}`` body returned by Google APIs,
when one is present and recognized. Builders turn the resulting
:class:`ErrorInfo` into the exception raised to callers.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from dataclasses import dataclass

import httpx

from .errors import ErrorCode, FirebaseError
from .models import ErrorInfo, HttpResponse

_HTTP_ERROR_CODES: Mapping[int, ErrorCode] = {
    400: ErrorCode.INVALID_ARGUMENT,
    401: ErrorCode.UNAUTHENTICATED,
    403: ErrorCode.PERMISSION_DENIED,
    404: ErrorCode.NOT_FOUND,
    409: ErrorCode.CONFLICT,
    429: ErrorCode.RESOURCE_EXHAUSTED,
    500: ErrorCode.INTERNAL,
    503: ErrorCode.UNAVAILABLE,
}

_PLATFORM_ERROR_CODES: Mapping[str, ErrorCode] = {
    "INVALID_ARGUMENT": ErrorCode.INVALID_ARGUMENT,
    "INTERNAL": ErrorCode.INTERNAL,
    "PERMISSION_DENIED": ErrorCode.PERMISSION_DENIED,
    "UNAUTHENTICATED": ErrorCode.UNAUTHENTICATED,
    "UNAVAILABLE": ErrorCode.UNAVAILABLE,
}

ErrorInfoExtractor = Callable[[HttpResponse], ErrorInfo]
ErrorBuilder = Callable[[ErrorInfo, HttpResponse], FirebaseError]


@dataclass(slots=True, frozen=True)
class PlatformError:
    status: str | None = None
    message: str | None = None
    details: tuple[Mapping[str, object], ...] = ()


def http_error_code(status_code: int) -> ErrorCode:
    return _HTTP_ERROR_CODES.get(status_code, ErrorCode.UNKNOWN)


def platform_error_code(status: str | None) -> ErrorCode | None:
    if status is None:
        return None
    return _PLATFORM_ERROR_CODES.get(status)


def describe_status(status_code: int) -> str:
    reason = httpx.codes.get_reason_phrase(status_code)
    return f"{status_code} ({reason or 'Unknown Status'})"


def extract_http_error_info(response: HttpResponse) -> ErrorInfo:
    """Classify a non-success response by its HTTP status alone."""

    message = (
        f"Unexpected HTTP response with status: {describe_status(response.status_code)}"
        f"\n{response.text}"
    )
    return ErrorInfo(code=http_error_code(response.status_code), message=message)


def parse_platform_error(body: str | None) -> PlatformError:
    """Parse a structured error body; malformed input yields an empty result."""

    if not body:
        return PlatformError()
    try:
        payload = json.loads(body)
    except (TypeError, ValueError):
        return PlatformError()
    if not isinstance(payload, dict):
        return PlatformError()
    error = payload.get("error")
    if not isinstance(error, dict):
        return PlatformError()

    status = error.get("status")
    message = error.get("message")
    raw_details = error.get("details")
    details: tuple[Mapping[str, object], ...] = ()
    if isinstance(raw_details, list):
        details = tuple(item for item in raw_details if isinstance(item, dict))
    return PlatformError(
        status=status if isinstance(status, str) else None,
        message=message if isinstance(message, str) else None,
        details=details,
    )


def apply_platform_error(defaults: ErrorInfo, platform: PlatformError) -> ErrorInfo:
    code = platform_error_code(platform.status) or defaults.code
    message = platform.message or defaults.message
    return ErrorInfo(code=code, message=message)


def extract_platform_error_info(response: HttpResponse) -> ErrorInfo:
    """Classify a non-success response, preferring the structured error body."""

    defaults = extract_http_error_info(response)
    return apply_platform_error(defaults, parse_platform_error(response.text))


def build_firebase_error(info: ErrorInfo, response: HttpResponse) -> FirebaseError:
    return FirebaseError(
        info.message,
        code=info.code,
        http_status=response.status_code,
        response_body=response.text,
    )


def raise_for_error(
    response: HttpResponse,
    *,
    extract: ErrorInfoExtractor = extract_platform_error_info,
    build: ErrorBuilder = build_firebase_error,
) -> None:
    """Raise a classified error unless the response indicates success."""

    if response.is_success:
        return
    raise build(extract(response), response)


__all__ = [
    "ErrorInfoExtractor",
    "ErrorBuilder",
    "PlatformError",
    "http_error_code",
    "platform_error_code",
    "describe_status",
    "extract_http_error_info",
    "parse_platform_error",
    "apply_platform_error",
    "extract_platform_error_info",
    "build_firebase_error",
    "raise_for_error",
]
