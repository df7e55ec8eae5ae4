"""Pytest configuration and fixtures.

``FakeGitHubSource`` stands in for the GitHub transport: pages are scripted
per owner / repository, and an entry that is an exception is raised instead
of returned.
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Optional, Union

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.models.github_ranking import ContributorDescriptor, Page, RepositoryDescriptor  # noqa: E402

PageOrError = Union[Page, BaseException]


def repos_page(*names: str, owner: Optional[str] = "acme", has_next: bool = False) -> Page[RepositoryDescriptor]:
    return Page(items=[RepositoryDescriptor(name=n, owner_login=owner) for n in names], has_next=has_next)


def contributors_page(*pairs: tuple[str, int], has_next: bool = False) -> Page[ContributorDescriptor]:
    return Page(
        items=[ContributorDescriptor(login=login, contributions=count) for login, count in pairs],
        has_next=has_next,
    )


class FakeGitHubSource:
    def __init__(
        self,
        repo_pages: Optional[dict[str, list[PageOrError]]] = None,
        contributor_pages: Optional[dict[tuple[str, str], list[PageOrError]]] = None,
        contributor_delays: Optional[dict[tuple[str, str], float]] = None,
    ) -> None:
        self.repo_pages = repo_pages or {}
        self.contributor_pages = contributor_pages or {}
        self.contributor_delays = contributor_delays or {}
        self.calls: list[tuple] = []
        self.cancelled: list[tuple[str, str]] = []
        self.in_flight = 0
        self.max_in_flight = 0

    @staticmethod
    def _pick(pages: list[PageOrError], page_index: int) -> Page:
        entry = pages[page_index]
        if isinstance(entry, BaseException):
            raise entry
        return entry

    async def list_org_repos_page(self, owner: str, page_index: int, per_page: int = 100) -> Page:
        self.calls.append(("repos", owner, page_index, per_page))
        await asyncio.sleep(0)
        return self._pick(self.repo_pages.get(owner, [Page()]), page_index)

    async def list_repo_contributors_page(self, owner: str, repo: str, page_index: int, per_page: int = 100) -> Page:
        self.calls.append(("contributors", f"{owner}/{repo}", page_index, per_page))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.contributor_delays.get((owner, repo), 0))
            return self._pick(self.contributor_pages.get((owner, repo), [Page()]), page_index)
        except asyncio.CancelledError:
            self.cancelled.append((owner, repo))
            raise
        finally:
            self.in_flight -= 1

    def contributor_calls(self) -> list[tuple]:
        return [c for c in self.calls if c[0] == "contributors"]


@pytest.fixture(autouse=True)
def _clean_github_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # Keep developer tokens and overrides out of the tests.
    for key in (
        "GH_TOKEN",
        "GITHUB_TOKEN",
        "GITHUB_API_URL",
        "GITHUB_TIMEOUT_SECONDS",
        "GITHUB_CONTRIBUTOR_CONCURRENCY",
        "API_LOG_ALL_REQUESTS",
    ):
        monkeypatch.delenv(key, raising=False)
