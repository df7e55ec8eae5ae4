"""Drain a page-indexed listing into one list."""

from __future__ import annotations

from typing import Awaitable, Callable, TypeVar

from app.models.github_ranking import Page

T = TypeVar("T")


async def fetch_all_pages(
    fetch_page: Callable[[int], Awaitable[Page[T]]],
    start_page: int = 0,
) -> list[T]:
    """Fetch pages start_page, start_page + 1, ... until one reports no next page.

    Pages are requested one at a time, in order. The first error raised by
    ``fetch_page`` propagates and the items gathered so far are dropped.
    """
    results: list[T] = []
    page_index = start_page
    while True:
        page = await fetch_page(page_index)
        results.extend(page.items)
        if not page.has_next:
            return results
        page_index += 1
