"""Batch send request building and response correlation.

Every message becomes one ``application/http`` part of a single multipart
request. Each part is given a Content-ID which acts as its result slot; the
multipart response is matched back to the slots by Content-ID, so the final
outcome list always has one entry per input message, in input order.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from ..core.errors import ErrorCode
from ..core.http_errors import extract_platform_error_info
from ..core.models import HttpResponse
from ..core.multipart import (
    BatchPart,
    decode_batch_response,
    encode_batch,
    make_content_ids,
    new_boundary,
)
from ..core.response_parsing import load_json_object
from .errors import FirebaseMessagingError, build_messaging_error
from .models import BatchResponse, Message, SendResponse
from .requests import build_send_path, encode_send_request, extract_message_id

logger = logging.getLogger("firebase_admin_client")


@dataclass(slots=True, frozen=True)
class PreparedBatch:
    content_ids: tuple[str, ...]
    body: bytes
    content_type: str

    @property
    def size(self) -> int:
        return len(self.content_ids)


def validate_messages(messages: Sequence[Message], *, max_batch_size: int) -> list[Message]:
    if isinstance(messages, (str, bytes)) or not isinstance(messages, Sequence):
        raise TypeError("messages must be a list of Message instances.")
    for message in messages:
        if not isinstance(message, Message):
            raise TypeError("Message must be an instance of Message class.")
    if len(messages) > max_batch_size:
        raise ValueError(f"messages must not contain more than {max_batch_size} elements.")
    return list(messages)


def prepare_batch(
    messages: Sequence[Message],
    *,
    project_id: str,
    dry_run: bool,
    boundary: str | None = None,
    content_id_prefix: str | None = None,
) -> PreparedBatch:
    path = build_send_path(project_id)
    content_ids = make_content_ids(len(messages), prefix=content_id_prefix)
    parts = [
        BatchPart(
            content_id=content_id,
            method="POST",
            path=path,
            body=json.dumps(encode_send_request(message, dry_run=dry_run)),
        )
        for content_id, message in zip(content_ids, messages)
    ]
    body, content_type = encode_batch(parts, boundary=boundary or new_boundary())
    return PreparedBatch(content_ids=tuple(content_ids), body=body, content_type=content_type)


def unclassified_failure(status_code: int, body: str | None = None) -> FirebaseMessagingError:
    return FirebaseMessagingError(
        "Something went wrong processing a batch item. "
        f"The response status code was {status_code}.",
        code=ErrorCode.INTERNAL,
        http_status=status_code,
        response_body=body,
    )


def classify_batch_item(response: HttpResponse) -> SendResponse:
    """Turn a single sub-response into a success or failure outcome."""

    if not response.is_success:
        info = extract_platform_error_info(response)
        return SendResponse(exception=build_messaging_error(info, response))

    message_id = extract_message_id(load_json_object(response.text))
    if message_id is None:
        return SendResponse(exception=unclassified_failure(response.status_code, response.text))
    return SendResponse(message_id=message_id)


def _missing_item(index: int) -> SendResponse:
    return SendResponse(
        exception=FirebaseMessagingError(
            f"No response was received for batch item {index}.",
            code=ErrorCode.INTERNAL,
        )
    )


def assemble_batch_response(prepared: PreparedBatch, response: HttpResponse) -> BatchResponse:
    slots: dict[str, SendResponse | None] = dict.fromkeys(prepared.content_ids)
    for part in decode_batch_response(response):
        if part.content_id not in slots:
            logger.warning("batch response part has unknown content_id=%s", part.content_id)
            continue
        if slots[part.content_id] is not None:
            logger.warning("batch response part is duplicated content_id=%s", part.content_id)
            continue
        slots[part.content_id] = classify_batch_item(part.response)

    outcomes: list[SendResponse] = []
    for index, content_id in enumerate(prepared.content_ids):
        outcome = slots[content_id] or _missing_item(index)
        if not outcome.success:
            logger.warning(
                "batch item failed index=%s code=%s",
                index,
                outcome.exception.code.value,
            )
        outcomes.append(outcome)
    return BatchResponse(responses=outcomes)


__all__ = [
    "PreparedBatch",
    "validate_messages",
    "prepare_batch",
    "unclassified_failure",
    "classify_batch_item",
    "assemble_batch_response",
]
