"""Sync HTTP transport."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Protocol

import httpx

from ..config import FirebaseClientConfig
from .errors import FirebaseTransportError
from .models import HttpResponse
from .transport_shared import (
    build_default_headers,
    build_default_timeout,
    build_request_kwargs,
    transport_error_from,
)

logger = logging.getLogger("firebase_admin_client")


class SyncTransportClient(Protocol):
    def request(self, method: str, url: str, **kwargs: object) -> object: ...
    def close(self) -> None: ...


class SyncTransport:
    """Synchronous transport over an authorized HTTP client."""

    def __init__(
        self,
        config: FirebaseClientConfig,
        *,
        client: SyncTransportClient | None = None,
        auth: httpx.Auth | None = None,
    ) -> None:
        self._config = config
        self._closed = False
        self._owns_client = client is None
        self._client = client or httpx.Client(
            headers=build_default_headers(config),
            timeout=build_default_timeout(config),
            auth=auth,
        )

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._owns_client and hasattr(self._client, "close"):
            self._client.close()

    def request(
        self,
        method: str,
        url: str,
        *,
        json: object | None = None,
        params: Mapping[str, str] | None = None,
        content: bytes | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> HttpResponse:
        if self._closed:
            raise FirebaseTransportError("transport is already closed")

        logger.debug("request start method=%s url=%s", method, url)
        try:
            response = self._client.request(
                method,
                url,
                **build_request_kwargs(json=json, params=params, content=content, headers=headers),
            )
        except Exception as exc:
            logger.error(
                "request network error method=%s url=%s error=%s",
                method,
                url,
                exc.__class__.__name__,
            )
            raise transport_error_from(exc, url=url) from exc

        result = HttpResponse(
            status_code=response.status_code,
            text=response.text,
            headers=dict(response.headers),
        )
        logger.debug("response received url=%s http_status=%s", url, result.status_code)
        return result


__all__ = [
    "SyncTransport",
]
