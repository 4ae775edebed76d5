"""Cloud Messaging error codes and error construction."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum

from ..core.errors import ErrorCode, FirebaseError
from ..core.http_errors import PlatformError, parse_platform_error
from ..core.models import ErrorInfo, HttpResponse

FCM_ERROR_TYPE = "type.googleapis.com/google.firebase.fcm.v1.FcmError"


class MessagingErrorCode(str, Enum):
    """Cloud Messaging specific refinement of :class:`ErrorCode`."""

    UNREGISTERED = "UNREGISTERED"
    SENDER_ID_MISMATCH = "SENDER_ID_MISMATCH"
    QUOTA_EXCEEDED = "QUOTA_EXCEEDED"
    THIRD_PARTY_AUTH_ERROR = "THIRD_PARTY_AUTH_ERROR"
    UNSPECIFIED = "UNSPECIFIED"


_MESSAGING_ERROR_CODES: Mapping[str, MessagingErrorCode] = {
    "UNREGISTERED": MessagingErrorCode.UNREGISTERED,
    "SENDER_ID_MISMATCH": MessagingErrorCode.SENDER_ID_MISMATCH,
    "QUOTA_EXCEEDED": MessagingErrorCode.QUOTA_EXCEEDED,
    "THIRD_PARTY_AUTH_ERROR": MessagingErrorCode.THIRD_PARTY_AUTH_ERROR,
    "APNS_AUTH_ERROR": MessagingErrorCode.THIRD_PARTY_AUTH_ERROR,
    "UNSPECIFIED": MessagingErrorCode.UNSPECIFIED,
    "UNSPECIFIED_ERROR": MessagingErrorCode.UNSPECIFIED,
}


class FirebaseMessagingError(FirebaseError):
    """Exception raised by Cloud Messaging APIs."""

    def __init__(
        self,
        message: str,
        *,
        code: ErrorCode = ErrorCode.UNKNOWN,
        messaging_error_code: MessagingErrorCode | None = None,
        http_status: int | None = None,
        response_body: str | None = None,
        cause: str | None = None,
    ) -> None:
        super().__init__(
            message,
            code=code,
            http_status=http_status,
            response_body=response_body,
            cause=cause,
        )
        self.messaging_error_code = messaging_error_code


def _fcm_detail_code(platform: PlatformError) -> str | None:
    for detail in platform.details:
        if detail.get("@type") != FCM_ERROR_TYPE:
            continue
        value = detail.get("errorCode")
        if isinstance(value, str):
            return value
    return None


def extract_messaging_error_code(platform: PlatformError) -> MessagingErrorCode | None:
    """Resolve the messaging sub-code from an FcmError detail or the status string."""

    for candidate in (_fcm_detail_code(platform), platform.status):
        if candidate is None:
            continue
        resolved = _MESSAGING_ERROR_CODES.get(candidate)
        if resolved is not None:
            return resolved
    return None


def build_messaging_error(info: ErrorInfo, response: HttpResponse) -> FirebaseMessagingError:
    platform = parse_platform_error(response.text)
    return FirebaseMessagingError(
        info.message,
        code=info.code,
        messaging_error_code=extract_messaging_error_code(platform),
        http_status=response.status_code,
        response_body=response.text,
    )


__all__ = [
    "FCM_ERROR_TYPE",
    "MessagingErrorCode",
    "FirebaseMessagingError",
    "extract_messaging_error_code",
    "build_messaging_error",
]
