from __future__ import annotations

import json
import re
from collections.abc import Sequence

from tests.shared.transport import Response, Responder

BOUNDARY = "batch_test"
MULTIPART_HEADERS = {"content-type": f"multipart/mixed; boundary={BOUNDARY}"}


def success_body(message_id: str = "projects/test-project/messages/1") -> str:
    return json.dumps({"name": message_id})


def error_body(
    status: str | None = None,
    message: str | None = None,
    *,
    fcm_error_code: str | None = None,
) -> str:
    error: dict[str, object] = {}
    if status is not None:
        error["status"] = status
    if message is not None:
        error["message"] = message
    if fcm_error_code is not None:
        error["details"] = [
            {
                "@type": "type.googleapis.com/google.firebase.fcm.v1.FcmError",
                "errorCode": fcm_error_code,
            }
        ]
    return json.dumps({"error": error})


def request_content_ids(content: bytes) -> list[str]:
    return re.findall(r"Content-ID: <([^>]+)>", content.decode("utf-8"))


def request_part_bodies(content: bytes) -> list[dict[str, object]]:
    lines = content.decode("utf-8").split("\r\n")
    return [json.loads(line) for line in lines if line.startswith("{")]


def make_batch_payload(
    content_ids: Sequence[str],
    items: Sequence[tuple[int, str]],
) -> str:
    payload = ""
    for content_id, (status_code, body) in zip(content_ids, items):
        payload += (
            f"--{BOUNDARY}\r\n"
            "Content-Type: application/http\r\n"
            f"Content-ID: <response-{content_id}>\r\n\r\n"
            f"HTTP/1.1 {status_code} Status\r\n"
            "Content-Type: application/json; charset=UTF-8\r\n\r\n"
            f"{body}\r\n\r\n"
        )
    payload += f"--{BOUNDARY}--"
    return payload


def batch_responder(
    items: Sequence[tuple[int, str]],
    *,
    reverse: bool = False,
) -> Responder:
    """Answer a batch request with one part per item, echoing Content-IDs."""

    def _respond(method: str, url: str, kwargs: dict) -> Response:
        content_ids = request_content_ids(kwargs["content"])
        pairs = list(zip(content_ids, items))
        if reverse:
            pairs.reverse()
        payload = make_batch_payload([cid for cid, _ in pairs], [item for _, item in pairs])
        return Response(200, payload, headers=MULTIPART_HEADERS)

    return _respond
