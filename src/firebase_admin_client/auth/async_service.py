"""Async Auth user listing operations."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator

from ..config import AuthConfig
from ..core.async_pagination import aiterate_pages
from ..core.async_transport import AsyncTransport
from ..core.http_errors import raise_for_error
from .list_users import build_list_users_params, build_list_users_url, parse_list_users_response
from .models import ExportedUserRecord, ExportedUserRecords, ListUsersOptions

logger = logging.getLogger("firebase_admin_client")


class AsyncAuthService:
    """Lists user accounts through the Identity Toolkit API with asyncio."""

    def __init__(
        self,
        transport: AsyncTransport,
        *,
        project_id: str,
        config: AuthConfig | None = None,
    ) -> None:
        self._transport = transport
        self._config = config or AuthConfig()
        self._url = build_list_users_url(self._config.base_url, project_id)

    async def list_users(self, options: ListUsersOptions | None = None) -> ExportedUserRecords:
        params = build_list_users_params(
            options or ListUsersOptions(),
            max_results=self._config.max_list_users_results,
        )
        response = await self._transport.request("GET", self._url, params=params)
        if not response.is_success:
            logger.error("list_users failed http_status=%s", response.status_code)
        raise_for_error(response)
        page = parse_list_users_response(response)
        logger.info(
            "list_users completed users=%s has_next_page=%s",
            len(page.users),
            page.has_next_page,
        )
        return page

    def iter_pages(
        self,
        options: ListUsersOptions | None = None,
    ) -> AsyncIterator[ExportedUserRecords]:
        resolved = options or ListUsersOptions()
        build_list_users_params(resolved, max_results=self._config.max_list_users_results)

        async def fetch_page(token: str | None) -> ExportedUserRecords:
            return await self.list_users(
                ListUsersOptions(page_size=resolved.page_size, page_token=token)
            )

        return aiterate_pages(
            fetch_page,
            lambda page: page.next_page_token,
            start_token=resolved.page_token,
        )

    async def iter_users(
        self,
        options: ListUsersOptions | None = None,
    ) -> AsyncIterator[ExportedUserRecord]:
        async for page in self.iter_pages(options):
            for user in page.users:
                yield user


__all__ = [
    "AsyncAuthService",
]
