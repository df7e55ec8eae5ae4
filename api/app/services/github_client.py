"""GitHub API client used by the contributor ranking.

Async REST wrapper with:
- optional token auth (GH_TOKEN, then GITHUB_TOKEN)
- one pooled httpx.AsyncClient shared by every concurrent listing
- typed pages: items plus a has_next flag taken from the Link header
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, TypeVar

import httpx
from pydantic import ValidationError

from app.models.github_ranking import ContributorDescriptor, Page, RepositoryDescriptor
from app.services import github_config
from app.services.github_errors import TransportError

T = TypeVar("T")
log = logging.getLogger(__name__)


def _repository_descriptor(row: Any) -> RepositoryDescriptor:
    if not isinstance(row, dict):
        raise TypeError(f"repository item must be an object, got {type(row).__name__}")
    owner = row.get("owner")
    owner_login = owner.get("login") if isinstance(owner, dict) else None
    return RepositoryDescriptor(name=row.get("name"), owner_login=owner_login)


def _contributor_descriptor(row: Any) -> ContributorDescriptor:
    if not isinstance(row, dict):
        raise TypeError(f"contributor item must be an object, got {type(row).__name__}")
    return ContributorDescriptor(login=row.get("login"), contributions=row.get("contributions", 0))


class GitHubClient:
    def __init__(
        self,
        token: Optional[str] = None,
        base_url: Optional[str] = None,
        user_agent: str = "githubrank/1.0",
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._token = token or github_config.github_token()
        self._base_url = (base_url or github_config.github_api_url()).rstrip("/")
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": user_agent,
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        self._client = httpx.AsyncClient(
            headers=headers,
            timeout=timeout if timeout is not None else github_config.github_timeout_seconds(),
            transport=transport,
        )

    @property
    def authenticated(self) -> bool:
        return bool(self._token)

    @property
    def base_url(self) -> str:
        return self._base_url

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def _get_page(
        self,
        path: str,
        page_index: int,
        per_page: int,
        parse_item: Callable[[Any], T],
    ) -> Page[T]:
        url = f"{self._base_url}{path}"
        # GitHub pages are 1-based.
        params = {"per_page": per_page, "page": page_index + 1}
        try:
            r = await self._client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise TransportError(f"GitHub request failed for {url}", exc, url=url) from exc

        if r.status_code == 204:
            # Empty repositories answer the contributors listing with no content.
            return Page(items=[], has_next=False)
        if r.status_code >= 400:
            raise TransportError(
                f"GitHub API error {r.status_code} for {r.url}: {r.text[:200]}",
                status=r.status_code,
                url=str(r.url),
            )

        try:
            data = r.json()
        except ValueError as exc:
            raise TransportError(
                f"GitHub response was not JSON for {r.url}", exc, status=r.status_code, url=str(r.url)
            ) from exc
        if not isinstance(data, list):
            raise TransportError(
                f"GitHub response for {r.url} is not a list", status=r.status_code, url=str(r.url)
            )

        try:
            items = [parse_item(row) for row in data]
        except (TypeError, ValidationError) as exc:
            raise TransportError(
                f"Unable to decode GitHub response for {r.url}", exc, status=r.status_code, url=str(r.url)
            ) from exc

        has_next = "next" in r.links
        log.debug("github_page url=%s page=%s items=%s has_next=%s", url, page_index, len(items), has_next)
        return Page(items=items, has_next=has_next)

    async def list_org_repos_page(
        self, owner: str, page_index: int, per_page: int = github_config.PER_PAGE_MAX
    ) -> Page[RepositoryDescriptor]:
        return await self._get_page(f"/orgs/{owner}/repos", page_index, per_page, _repository_descriptor)

    async def list_repo_contributors_page(
        self, owner: str, repo: str, page_index: int, per_page: int = github_config.PER_PAGE_MAX
    ) -> Page[ContributorDescriptor]:
        return await self._get_page(
            f"/repos/{owner}/{repo}/contributors", page_index, per_page, _contributor_descriptor
        )
