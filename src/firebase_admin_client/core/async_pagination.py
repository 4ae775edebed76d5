"""Async pagination helpers based on page tokens."""

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from typing import TypeVar

from .errors import ErrorCode, FirebaseError

PageT = TypeVar("PageT")


async def aiterate_pages(
    fetch_page: Callable[[str | None], Awaitable[PageT]],
    next_token: Callable[[PageT], str | None],
    *,
    start_token: str | None = None,
    max_pages: int = 10_000,
) -> AsyncIterator[PageT]:
    current = start_token
    seen_tokens: set[str] = set()

    for _ in range(max_pages):
        page = await fetch_page(current)
        yield page

        token = next_token(page)
        if token is None:
            return
        if token in seen_tokens:
            raise FirebaseError("nextPageToken loop detected", code=ErrorCode.INTERNAL)
        seen_tokens.add(token)
        current = token

    raise FirebaseError("Exceeded pagination guardrail (max_pages)", code=ErrorCode.INTERNAL)


__all__ = [
    "aiterate_pages",
]
