"""Auth user listing operations."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from ..config import AuthConfig
from ..core.http_errors import raise_for_error
from ..core.pagination import iterate_pages
from ..core.transport import SyncTransport
from .list_users import build_list_users_params, build_list_users_url, parse_list_users_response
from .models import ExportedUserRecord, ExportedUserRecords, ListUsersOptions

logger = logging.getLogger("firebase_admin_client")


class AuthService:
    """Lists user accounts through the Identity Toolkit API."""

    def __init__(
        self,
        transport: SyncTransport,
        *,
        project_id: str,
        config: AuthConfig | None = None,
    ) -> None:
        self._transport = transport
        self._config = config or AuthConfig()
        self._url = build_list_users_url(self._config.base_url, project_id)

    def list_users(self, options: ListUsersOptions | None = None) -> ExportedUserRecords:
        """Fetch one page of users."""

        params = build_list_users_params(
            options or ListUsersOptions(),
            max_results=self._config.max_list_users_results,
        )
        response = self._transport.request("GET", self._url, params=params)
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

    def iter_pages(self, options: ListUsersOptions | None = None) -> Iterator[ExportedUserRecords]:
        resolved = options or ListUsersOptions()
        build_list_users_params(resolved, max_results=self._config.max_list_users_results)
        return iterate_pages(
            lambda token: self.list_users(
                ListUsersOptions(page_size=resolved.page_size, page_token=token)
            ),
            lambda page: page.next_page_token,
            start_token=resolved.page_token,
        )

    def iter_users(self, options: ListUsersOptions | None = None) -> Iterator[ExportedUserRecord]:
        """Iterate over every user, following page tokens until exhausted."""

        for page in self.iter_pages(options):
            yield from page.users


__all__ = [
    "AuthService",
]
