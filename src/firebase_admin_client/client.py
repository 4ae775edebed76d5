"""Public client entrypoint."""

from __future__ import annotations

from collections.abc import Generator, Iterator, Sequence
from types import TracebackType
from typing import TypeVar

import httpx

from .auth.models import ExportedUserRecord, ExportedUserRecords, ListUsersOptions
from .auth.service import AuthService
from .client_shared import resolve_project_id, validate_client_config
from .config import FirebaseClientConfig
from .core.errors import FirebaseClientClosedError
from .core.transport import SyncTransport
from .messaging.models import BatchResponse, Message, MulticastMessage
from .messaging.service import MessagingService

T = TypeVar("T")


class _GuardedMessagingService:
    """Guard wrapper to block usage after client close."""

    def __init__(self, owner: "FirebaseClient", delegate: MessagingService) -> None:
        self._owner = owner
        self._delegate = delegate

    def send(self, message: Message, *, dry_run: bool = False) -> str:
        self._owner._ensure_open()
        return self._delegate.send(message, dry_run=dry_run)

    def send_all(self, messages: Sequence[Message], *, dry_run: bool = False) -> BatchResponse:
        self._owner._ensure_open()
        return self._delegate.send_all(messages, dry_run=dry_run)

    def send_multicast(self, multicast: MulticastMessage, *, dry_run: bool = False) -> BatchResponse:
        self._owner._ensure_open()
        return self._delegate.send_multicast(multicast, dry_run=dry_run)


class _GuardedAuthService:
    """Guard wrapper to block usage after client close."""

    def __init__(self, owner: "FirebaseClient", delegate: AuthService) -> None:
        self._owner = owner
        self._delegate = delegate

    def list_users(self, options: ListUsersOptions | None = None) -> ExportedUserRecords:
        self._owner._ensure_open()
        return self._delegate.list_users(options)

    def iter_pages(self, options: ListUsersOptions | None = None) -> Iterator[ExportedUserRecords]:
        self._owner._ensure_open()
        return self._guarded(self._delegate.iter_pages(options))

    def iter_users(self, options: ListUsersOptions | None = None) -> Iterator[ExportedUserRecord]:
        return self._guarded(self._delegate.iter_users(options))

    def _guarded(self, iterator: Generator[T, None, None]) -> Iterator[T]:
        try:
            while True:
                self._owner._ensure_open()
                try:
                    item = next(iterator)
                except StopIteration:
                    return
                yield item
        finally:
            iterator.close()


class FirebaseClient:
    """Public Firebase client exposing ``messaging`` and ``auth``."""

    def __init__(
        self,
        *,
        config: FirebaseClientConfig | None = None,
        transport: SyncTransport | None = None,
        http_client: httpx.Client | None = None,
        auth: httpx.Auth | None = None,
    ) -> None:
        self._config = config or FirebaseClientConfig()
        validate_client_config(self._config)
        project_id = resolve_project_id(self._config)

        self._transport = transport or SyncTransport(self._config, client=http_client, auth=auth)
        self._closed = False
        self.messaging = _GuardedMessagingService(
            self,
            MessagingService(self._transport, project_id=project_id, config=self._config.messaging),
        )
        self.auth = _GuardedAuthService(
            self,
            AuthService(self._transport, project_id=project_id, config=self._config.auth),
        )

    def _ensure_open(self) -> None:
        if self._closed:
            raise FirebaseClientClosedError("FirebaseClient is already closed")

    def close(self) -> None:
        if self._closed:
            return
        self._transport.close()
        self._closed = True

    def __enter__(self) -> "FirebaseClient":
        self._ensure_open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        self.close()
        return False


__all__ = [
    "FirebaseClient",
]
