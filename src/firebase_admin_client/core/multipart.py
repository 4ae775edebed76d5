"""multipart/mixed encoding for Google batch HTTP requests.

A batch request wraps several HTTP requests as ``application/http`` parts of
a single ``multipart/mixed`` body. Each part carries a ``Content-ID`` header;
the server echoes it back as ``response-<id>`` on the matching response part,
which is how responses are correlated with requests.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from email.parser import Parser

from .models import HttpResponse

logger = logging.getLogger("firebase_admin_client")

_CRLF = "\r\n"
_RESPONSE_ID_PREFIX = "response-"


@dataclass(slots=True, frozen=True)
class BatchPart:
    content_id: str
    method: str
    path: str
    body: str
    headers: Mapping[str, str] = field(default_factory=dict)


@dataclass(slots=True, frozen=True)
class BatchPartResponse:
    content_id: str | None
    response: HttpResponse


def new_boundary() -> str:
    return f"batch_{uuid.uuid4().hex}"


def make_content_ids(count: int, *, prefix: str | None = None) -> list[str]:
    base = prefix or uuid.uuid4().hex
    return [f"{base}+{index + 1}" for index in range(count)]


def _encode_part(part: BatchPart, boundary: str) -> str:
    body_bytes = part.body.encode("utf-8")
    lines = [
        f"--{boundary}",
        "Content-Type: application/http",
        "Content-Transfer-Encoding: binary",
        f"Content-ID: <{part.content_id}>",
        "",
        f"{part.method} {part.path} HTTP/1.1",
    ]
    headers = {"Content-Type": "application/json; charset=UTF-8", **part.headers}
    headers["Content-Length"] = str(len(body_bytes))
    lines.extend(f"{name}: {value}" for name, value in headers.items())
    lines.append("")
    lines.append(part.body)
    return _CRLF.join(lines) + _CRLF


def encode_batch(parts: Sequence[BatchPart], *, boundary: str) -> tuple[bytes, str]:
    """Return the multipart body and its Content-Type header value."""

    chunks = [_encode_part(part, boundary) for part in parts]
    chunks.append(f"--{boundary}--{_CRLF}")
    return "".join(chunks).encode("utf-8"), f"multipart/mixed; boundary={boundary}"


def normalize_content_id(header: str | None) -> str | None:
    if header is None:
        return None
    value = header.strip()
    if value.startswith("<") and value.endswith(">"):
        value = value[1:-1]
    if value.startswith(_RESPONSE_ID_PREFIX):
        value = value[len(_RESPONSE_ID_PREFIX):]
    return value or None


def _decode_http_payload(payload: str) -> HttpResponse | None:
    status_line, _, remainder = payload.lstrip().partition("\n")
    pieces = status_line.strip().split(" ", 2)
    if len(pieces) < 2 or not pieces[1].isdigit():
        return None
    message = Parser().parsestr(remainder)
    body = message.get_payload()
    if not isinstance(body, str):
        body = ""
    return HttpResponse(
        status_code=int(pieces[1]),
        text=body.strip(),
        headers={name: str(value) for name, value in message.items()},
    )


def decode_batch_response(response: HttpResponse) -> list[BatchPartResponse]:
    """Split a multipart/mixed batch response into per-part responses.

    Parts that cannot be decoded are skipped; the caller treats the
    corresponding requests as having received no response.
    """

    content_type = response.header("content-type")
    if not content_type or not content_type.lower().startswith("multipart/"):
        logger.warning("batch response is not multipart content_type=%s", content_type)
        return []

    document = f"Content-Type: {content_type}{_CRLF}{_CRLF}{response.text}"
    mime = Parser().parsestr(document)
    if not mime.is_multipart():
        logger.warning("batch response has no parts")
        return []

    results: list[BatchPartResponse] = []
    for part in mime.get_payload():
        payload = part.get_payload()
        if not isinstance(payload, str):
            continue
        decoded = _decode_http_payload(payload)
        if decoded is None:
            logger.warning("batch response part is not an HTTP response")
            continue
        results.append(
            BatchPartResponse(
                content_id=normalize_content_id(part.get("Content-ID")),
                response=decoded,
            )
        )
    return results


__all__ = [
    "BatchPart",
    "BatchPartResponse",
    "new_boundary",
    "make_content_ids",
    "encode_batch",
    "normalize_content_id",
    "decode_batch_response",
]
