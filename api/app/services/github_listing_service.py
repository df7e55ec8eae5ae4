"""Full listings of an organization's repositories and a repository's contributors."""

from __future__ import annotations

import logging

from app.adapters.github_source import GitHubSource
from app.models.github_ranking import ContributorRecord, RepositoryDescriptor, RepositoryRef
from app.services.github_config import PER_PAGE_MAX
from app.services.github_errors import DataError, FetchError, TransportError
from app.services.pagination import fetch_all_pages

log = logging.getLogger(__name__)


def _repository_ref(descriptor: RepositoryDescriptor) -> RepositoryRef:
    if not descriptor.owner_login:
        raise DataError(f"Repository {descriptor.name} has no owner")
    return RepositoryRef(owner=descriptor.owner_login, name=descriptor.name)


async def list_repositories(source: GitHubSource, owner: str) -> list[RepositoryRef]:
    """All repositories of an organization, in listing order.

    Raises FetchError when any page fails or any repository lacks an owner;
    no partial list is returned.
    """

    async def fetch_page(page_index: int):
        return await source.list_org_repos_page(owner, page_index, PER_PAGE_MAX)

    context = f"Unable to fetch {owner} repositories"
    try:
        descriptors = await fetch_all_pages(fetch_page)
        refs = [_repository_ref(d) for d in descriptors]
    except (TransportError, DataError) as exc:
        raise FetchError(context, exc) from exc
    log.debug("github_repositories_listed owner=%s count=%s", owner, len(refs))
    return refs


async def list_contributors(source: GitHubSource, owner: str, repo: str) -> list[ContributorRecord]:
    """All contributors of one repository. Transport errors propagate unchanged."""

    async def fetch_page(page_index: int):
        return await source.list_repo_contributors_page(owner, repo, page_index, PER_PAGE_MAX)

    descriptors = await fetch_all_pages(fetch_page)
    return [ContributorRecord(name=d.login, contributions=d.contributions) for d in descriptors]
