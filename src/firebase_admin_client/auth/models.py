"""Auth user listing models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(slots=True, frozen=True)
class ListUsersOptions:
    page_size: int | None = None
    page_token: str | None = None

    def __post_init__(self) -> None:
        if self.page_size is not None and (
            isinstance(self.page_size, bool) or not isinstance(self.page_size, int)
        ):
            raise TypeError("page_size must be int")
        if self.page_token is not None and not isinstance(self.page_token, str):
            raise TypeError("page_token must be str")


@dataclass(slots=True, frozen=True)
class ExportedUserRecord:
    """A user account as exported by ``accounts:batchGet``."""

    uid: str
    email: str | None = None
    email_verified: bool = False
    display_name: str | None = None
    phone_number: str | None = None
    photo_url: str | None = None
    disabled: bool = False
    password_hash: str | None = None
    password_salt: str | None = None
    tenant_id: str | None = None
    custom_claims: Mapping[str, object] | None = None
    created_at: int | None = None
    last_login_at: int | None = None


@dataclass(slots=True, frozen=True)
class ExportedUserRecords:
    users: tuple[ExportedUserRecord, ...] | list[ExportedUserRecord] = field(default_factory=tuple)
    next_page_token: str | None = None

    def __post_init__(self) -> None:
        if isinstance(self.users, tuple):
            return
        object.__setattr__(self, "users", tuple(self.users))

    @property
    def has_next_page(self) -> bool:
        return self.next_page_token is not None


__all__ = [
    "ListUsersOptions",
    "ExportedUserRecord",
    "ExportedUserRecords",
]
