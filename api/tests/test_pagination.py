"""Tests for draining page-indexed listings."""

import pytest

from app.models.github_ranking import Page
from app.services.github_errors import TransportError
from app.services.pagination import fetch_all_pages


def _scripted(pages):
    requested: list[int] = []

    async def fetch_page(page_index: int):
        requested.append(page_index)
        entry = pages[page_index]
        if isinstance(entry, BaseException):
            raise entry
        return entry

    return fetch_page, requested


@pytest.mark.asyncio
async def test_accumulates_every_page_in_order():
    pages = [
        Page(items=[1, 2, 3], has_next=True),
        Page(items=[4], has_next=True),
        Page(items=[5, 6], has_next=False),
    ]
    fetch_page, requested = _scripted(pages)

    items = await fetch_all_pages(fetch_page)

    assert items == [1, 2, 3, 4, 5, 6]
    assert len(items) == sum(len(p.items) for p in pages)
    assert requested == [0, 1, 2]


@pytest.mark.asyncio
async def test_single_page_without_next():
    fetch_page, requested = _scripted([Page(items=["a"], has_next=False)])

    assert await fetch_all_pages(fetch_page) == ["a"]
    assert requested == [0]


@pytest.mark.asyncio
async def test_full_page_followed_by_empty_last_page():
    """100 items with has_next, then an empty final page: exactly the 100 items."""
    fetch_page, requested = _scripted(
        [Page(items=list(range(100)), has_next=True), Page(items=[], has_next=False)]
    )

    items = await fetch_all_pages(fetch_page)

    assert items == list(range(100))
    assert requested == [0, 1]


@pytest.mark.asyncio
async def test_empty_listing():
    fetch_page, _ = _scripted([Page(items=[], has_next=False)])
    assert await fetch_all_pages(fetch_page) == []


@pytest.mark.asyncio
async def test_first_error_aborts_and_stops_fetching():
    boom = TransportError("GitHub API error 502")
    fetch_page, requested = _scripted(
        [
            Page(items=[1], has_next=True),
            boom,
            Page(items=[3], has_next=False),
        ]
    )

    with pytest.raises(TransportError) as exc_info:
        await fetch_all_pages(fetch_page)

    assert exc_info.value is boom
    assert requested == [0, 1]


@pytest.mark.asyncio
async def test_start_page_is_respected():
    fetch_page, requested = _scripted(
        [Page(items=["skipped"], has_next=True), Page(items=["x"], has_next=True), Page(items=["y"])]
    )

    assert await fetch_all_pages(fetch_page, start_page=1) == ["x", "y"]
    assert requested == [1, 2]
