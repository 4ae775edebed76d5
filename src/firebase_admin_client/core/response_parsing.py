"""Shared response parsing helpers for sync/async services."""

from __future__ import annotations

import json

from .errors import ErrorCode, FirebaseError
from .models import HttpResponse


def load_json_object(text: str | None) -> dict[str, object] | None:
    """Decode a JSON object, returning None for anything else."""

    if not text:
        return None
    try:
        payload = json.loads(text)
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    return payload


def parse_json_payload(
    response: HttpResponse,
    *,
    service: str,
    error_type: type[FirebaseError] = FirebaseError,
) -> dict[str, object]:
    """Parse a successful response body and map parse failures to domain errors."""

    payload = load_json_object(response.text)
    if payload is None:
        raise error_type(
            f"Error while parsing {service} service response",
            code=ErrorCode.UNKNOWN,
            http_status=response.status_code,
            response_body=response.text,
            cause="parse",
        )
    return payload


def optional_str(payload: dict[str, object], key: str) -> str | None:
    value = payload.get(key)
    if value is None:
        return None
    return str(value)


__all__ = [
    "load_json_object",
    "parse_json_payload",
    "optional_str",
]
