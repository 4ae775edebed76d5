"""Public async client entrypoint."""

from __future__ import annotations

from collections.abc import AsyncGenerator, AsyncIterator, Sequence
from types import TracebackType
from typing import TypeVar

import httpx

from .auth.async_service import AsyncAuthService
from .auth.models import ExportedUserRecord, ExportedUserRecords, ListUsersOptions
from .client_shared import resolve_project_id, validate_client_config
from .config import FirebaseClientConfig
from .core.async_transport import AsyncTransport
from .core.errors import FirebaseClientClosedError
from .messaging.async_service import AsyncMessagingService
from .messaging.models import BatchResponse, Message, MulticastMessage

T = TypeVar("T")


class _GuardedAsyncMessagingService:
    """Guard wrapper to block usage after async client close."""

    def __init__(self, owner: "AsyncFirebaseClient", delegate: AsyncMessagingService) -> None:
        self._owner = owner
        self._delegate = delegate

    async def send(self, message: Message, *, dry_run: bool = False) -> str:
        self._owner._ensure_open()
        return await self._delegate.send(message, dry_run=dry_run)

    async def send_all(
        self,
        messages: Sequence[Message],
        *,
        dry_run: bool = False,
    ) -> BatchResponse:
        self._owner._ensure_open()
        return await self._delegate.send_all(messages, dry_run=dry_run)

    async def send_multicast(
        self,
        multicast: MulticastMessage,
        *,
        dry_run: bool = False,
    ) -> BatchResponse:
        self._owner._ensure_open()
        return await self._delegate.send_multicast(multicast, dry_run=dry_run)


class _GuardedAsyncAuthService:
    """Guard wrapper to block usage after async client close."""

    def __init__(self, owner: "AsyncFirebaseClient", delegate: AsyncAuthService) -> None:
        self._owner = owner
        self._delegate = delegate

    async def list_users(self, options: ListUsersOptions | None = None) -> ExportedUserRecords:
        self._owner._ensure_open()
        return await self._delegate.list_users(options)

    def iter_pages(
        self,
        options: ListUsersOptions | None = None,
    ) -> AsyncIterator[ExportedUserRecords]:
        self._owner._ensure_open()
        return self._guarded(self._delegate.iter_pages(options))

    def iter_users(self, options: ListUsersOptions | None = None) -> AsyncIterator[ExportedUserRecord]:
        self._owner._ensure_open()
        return self._guarded(self._delegate.iter_users(options))

    async def _guarded(self, iterator: AsyncGenerator[T, None]) -> AsyncIterator[T]:
        try:
            while True:
                self._owner._ensure_open()
                try:
                    item = await anext(iterator)
                except StopAsyncIteration:
                    return
                yield item
        finally:
            await iterator.aclose()


class AsyncFirebaseClient:
    """Public async Firebase client exposing ``messaging`` and ``auth``."""

    def __init__(
        self,
        *,
        config: FirebaseClientConfig | None = None,
        transport: AsyncTransport | None = None,
        http_client: httpx.AsyncClient | None = None,
        auth: httpx.Auth | None = None,
    ) -> None:
        self._config = config or FirebaseClientConfig()
        validate_client_config(self._config)
        project_id = resolve_project_id(self._config)

        self._transport = transport or AsyncTransport(self._config, client=http_client, auth=auth)
        self._closed = False
        self.messaging = _GuardedAsyncMessagingService(
            self,
            AsyncMessagingService(
                self._transport,
                project_id=project_id,
                config=self._config.messaging,
            ),
        )
        self.auth = _GuardedAsyncAuthService(
            self,
            AsyncAuthService(self._transport, project_id=project_id, config=self._config.auth),
        )

    def _ensure_open(self) -> None:
        if self._closed:
            raise FirebaseClientClosedError("AsyncFirebaseClient is already closed")

    async def close(self) -> None:
        if self._closed:
            return
        await self._transport.close()
        self._closed = True

    async def __aenter__(self) -> "AsyncFirebaseClient":
        self._ensure_open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        await self.close()
        return False


__all__ = [
    "AsyncFirebaseClient",
]
