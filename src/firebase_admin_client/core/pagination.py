"""Pagination helpers based on page tokens."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import TypeVar

from .errors import ErrorCode, FirebaseError

PageT = TypeVar("PageT")


def normalize_page_token(raw: object) -> str | None:
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise FirebaseError("nextPageToken has unsupported type", code=ErrorCode.UNKNOWN)
    text = raw.strip()
    if text == "":
        return None
    return text


def iterate_pages(
    fetch_page: Callable[[str | None], PageT],
    next_token: Callable[[PageT], str | None],
    *,
    start_token: str | None = None,
    max_pages: int = 10_000,
) -> Iterator[PageT]:
    current = start_token
    seen_tokens: set[str] = set()

    for _ in range(max_pages):
        page = fetch_page(current)
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
    "normalize_page_token",
    "iterate_pages",
]
