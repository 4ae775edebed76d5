"""Shared helpers for sync/async transport implementations."""

from __future__ import annotations

from collections.abc import Mapping

import httpx

from ..config import FirebaseClientConfig
from .errors import ErrorCode, FirebaseTransportError


def build_default_headers(config: FirebaseClientConfig) -> Mapping[str, str]:
    return {
        "Accept-Encoding": "gzip",
        "User-Agent": config.user_agent,
        "X-Firebase-Client": config.user_agent,
    }


def build_default_timeout(config: FirebaseClientConfig) -> httpx.Timeout:
    return httpx.Timeout(
        connect=config.transport.timeout_connect_seconds,
        read=config.transport.timeout_read_seconds,
        write=config.transport.timeout_write_seconds,
        pool=config.transport.timeout_pool_seconds,
    )


def transport_error_from(exc: Exception, *, url: str) -> FirebaseTransportError:
    if isinstance(exc, (httpx.TimeoutException, httpx.NetworkError)):
        code = ErrorCode.UNAVAILABLE
    else:
        code = ErrorCode.UNKNOWN
    return FirebaseTransportError(
        f"Error while calling {url}: {exc.__class__.__name__}",
        code=code,
        cause="network",
    )


def build_request_kwargs(
    *,
    json: object | None,
    params: Mapping[str, str] | None,
    content: bytes | None,
    headers: Mapping[str, str] | None,
) -> dict[str, object]:
    kwargs: dict[str, object] = {}
    if json is not None:
        kwargs["json"] = json
    if params is not None:
        kwargs["params"] = dict(params)
    if content is not None:
        kwargs["content"] = content
    if headers is not None:
        kwargs["headers"] = dict(headers)
    return kwargs


__all__ = [
    "build_default_headers",
    "build_default_timeout",
    "transport_error_from",
    "build_request_kwargs",
]
