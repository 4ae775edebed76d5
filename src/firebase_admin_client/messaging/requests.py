"""Wire encoding for the FCM v1 send endpoint."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from ..core.errors import ErrorCode
from ..core.models import HttpResponse
from ..core.response_parsing import parse_json_payload
from .errors import FirebaseMessagingError
from .models import Message, Notification

SEND_PATH_TEMPLATE = "/v1/projects/{project_id}/messages:send"
BATCH_PATH = "/batch"

_PASSTHROUGH_FIELDS = ("android", "apns", "webpush", "fcm_options")


@dataclass(slots=True, frozen=True)
class SendRequest:
    """The envelope accepted by the send endpoint."""

    message: Message
    validate_only: bool = False


def build_send_path(project_id: str) -> str:
    return SEND_PATH_TEMPLATE.format(project_id=project_id)


def build_send_url(base_url: str, project_id: str) -> str:
    return base_url.rstrip("/") + build_send_path(project_id)


def build_batch_url(base_url: str) -> str:
    return base_url.rstrip("/") + BATCH_PATH


def _encode_notification(notification: Notification) -> dict[str, str]:
    encoded = {
        "title": notification.title,
        "body": notification.body,
        "image": notification.image,
    }
    return {key: value for key, value in encoded.items() if value is not None}


def encode_message(message: Message) -> dict[str, object]:
    encoded: dict[str, object] = {}
    for name in ("token", "topic", "condition"):
        value = getattr(message, name)
        if value is not None:
            encoded[name] = value
    if message.data is not None:
        encoded["data"] = dict(message.data)
    if message.notification is not None:
        encoded["notification"] = _encode_notification(message.notification)
    for name in _PASSTHROUGH_FIELDS:
        value = getattr(message, name)
        if value is not None:
            encoded[name] = dict(value)
    return encoded


def decode_message(payload: Mapping[str, object]) -> Message:
    notification = payload.get("notification")
    return Message(
        token=payload.get("token"),
        topic=payload.get("topic"),
        condition=payload.get("condition"),
        data=payload.get("data"),
        notification=Notification(**notification) if isinstance(notification, Mapping) else None,
        **{name: payload.get(name) for name in _PASSTHROUGH_FIELDS},
    )


def encode_send_request(message: Message, *, dry_run: bool) -> dict[str, object]:
    return {
        "message": encode_message(message),
        "validate_only": bool(dry_run),
    }


def decode_send_request(payload: Mapping[str, object]) -> SendRequest:
    message = payload.get("message")
    if not isinstance(message, Mapping):
        raise ValueError("send request must contain a message object")
    return SendRequest(
        message=decode_message(message),
        validate_only=bool(payload.get("validate_only", False)),
    )


def extract_message_id(payload: Mapping[str, object] | None) -> str | None:
    if not isinstance(payload, Mapping):
        return None
    value = payload.get("name")
    return value if isinstance(value, str) else None


def parse_send_response(response: HttpResponse) -> str:
    payload = parse_json_payload(response, service="FCM", error_type=FirebaseMessagingError)
    message_id = extract_message_id(payload)
    if message_id is None:
        raise FirebaseMessagingError(
            "FCM service response is missing the message name",
            code=ErrorCode.UNKNOWN,
            http_status=response.status_code,
            response_body=response.text,
            cause="parse",
        )
    return message_id


__all__ = [
    "SendRequest",
    "build_send_path",
    "build_send_url",
    "build_batch_url",
    "encode_message",
    "decode_message",
    "encode_send_request",
    "decode_send_request",
    "extract_message_id",
    "parse_send_response",
]
