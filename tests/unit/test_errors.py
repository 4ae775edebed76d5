from __future__ import annotations

from firebase_admin_client.core.errors import (
    ErrorCode,
    FirebaseClientClosedError,
    FirebaseError,
    FirebaseTransportError,
)
from firebase_admin_client.messaging.errors import FirebaseMessagingError, MessagingErrorCode


def test_firebase_error_defaults_to_unknown():
    err = FirebaseError("boom")
    assert err.code is ErrorCode.UNKNOWN
    assert err.http_status is None
    assert err.response_body is None
    assert str(err) == "boom"


def test_error_hierarchy():
    assert issubclass(FirebaseTransportError, FirebaseError)
    assert issubclass(FirebaseClientClosedError, FirebaseError)
    assert issubclass(FirebaseMessagingError, FirebaseError)


def test_messaging_error_carries_sub_code():
    err = FirebaseMessagingError(
        "gone",
        code=ErrorCode.NOT_FOUND,
        messaging_error_code=MessagingErrorCode.UNREGISTERED,
        http_status=404,
    )
    assert err.code is ErrorCode.NOT_FOUND
    assert err.messaging_error_code is MessagingErrorCode.UNREGISTERED
    assert err.http_status == 404


def test_error_codes_compare_as_strings():
    assert ErrorCode.RESOURCE_EXHAUSTED == "RESOURCE_EXHAUSTED"
    assert len(ErrorCode) == 9
