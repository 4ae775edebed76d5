from __future__ import annotations

import pytest

from firebase_admin_client.core.errors import ErrorCode, FirebaseError
from firebase_admin_client.core.http_errors import extract_platform_error_info, parse_platform_error
from firebase_admin_client.core.models import HttpResponse
from firebase_admin_client.messaging.errors import (
    FirebaseMessagingError,
    MessagingErrorCode,
    build_messaging_error,
    extract_messaging_error_code,
)
from tests.shared.payloads import error_body

FCM_ERROR_CODES = {
    "UNREGISTERED": MessagingErrorCode.UNREGISTERED,
    "SENDER_ID_MISMATCH": MessagingErrorCode.SENDER_ID_MISMATCH,
    "QUOTA_EXCEEDED": MessagingErrorCode.QUOTA_EXCEEDED,
    "THIRD_PARTY_AUTH_ERROR": MessagingErrorCode.THIRD_PARTY_AUTH_ERROR,
    "APNS_AUTH_ERROR": MessagingErrorCode.THIRD_PARTY_AUTH_ERROR,
    "UNSPECIFIED_ERROR": MessagingErrorCode.UNSPECIFIED,
}


def _build(status_code: int, body: str) -> FirebaseMessagingError:
    response = HttpResponse(status_code=status_code, text=body)
    return build_messaging_error(extract_platform_error_info(response), response)


@pytest.mark.parametrize(("fcm_code", "expected"), sorted(FCM_ERROR_CODES.items()))
def test_fcm_detail_error_code_is_attached(fcm_code, expected):
    err = _build(404, error_body("NOT_FOUND", "gone", fcm_error_code=fcm_code))
    assert isinstance(err, FirebaseError)
    assert err.code is ErrorCode.NOT_FOUND
    assert err.messaging_error_code is expected
    assert str(err) == "gone"


@pytest.mark.parametrize("status", ["UNREGISTERED", "QUOTA_EXCEEDED", "SENDER_ID_MISMATCH"])
def test_status_string_resolves_sub_code_and_falls_back_to_http_kind(status):
    err = _build(429, error_body(status, "x"))
    assert err.code is ErrorCode.RESOURCE_EXHAUSTED
    assert err.messaging_error_code is MessagingErrorCode(status)


def test_platform_status_without_sub_code():
    err = _build(400, error_body("INVALID_ARGUMENT", "bad"))
    assert err.code is ErrorCode.INVALID_ARGUMENT
    assert err.messaging_error_code is None


def test_malformed_body_has_no_sub_code():
    err = _build(500, "<html>oops</html>")
    assert err.code is ErrorCode.INTERNAL
    assert err.messaging_error_code is None
    assert err.response_body == "<html>oops</html>"


def test_detail_of_other_type_is_ignored():
    body = (
        '{"error": {"status": "INTERNAL", "details": '
        '[{"@type": "type.googleapis.com/google.rpc.BadRequest", "errorCode": "UNREGISTERED"}]}}'
    )
    assert extract_messaging_error_code(parse_platform_error(body)) is None
