"""Rank the contributors of every repository in a GitHub organization.

Fan-out/fan-in: list the organization's repositories, list each repository's
contributors concurrently, then flatten and sort by contribution count.

Counts are not summed per login: a person contributing to two repositories
appears twice, once per repository.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Optional

from app.adapters.github_source import GitHubSource
from app.models.github_ranking import ContributorRecord, RankedContributor, RepositoryRef
from app.services.github_errors import AggregationError, DataError, FetchError, TransportError
from app.services.github_listing_service import list_contributors, list_repositories

log = logging.getLogger(__name__)


async def _repository_contributors(
    source: GitHubSource,
    repo: RepositoryRef,
    limiter: Optional[asyncio.Semaphore],
) -> list[ContributorRecord]:
    try:
        if limiter is None:
            return await list_contributors(source, repo.owner, repo.name)
        async with limiter:
            return await list_contributors(source, repo.owner, repo.name)
    except (TransportError, DataError) as exc:
        raise FetchError(f"Unable to fetch {repo.full_name} contributors", exc) from exc


async def _gather_contributors(
    source: GitHubSource,
    repos: list[RepositoryRef],
    max_concurrency: Optional[int],
) -> list[list[ContributorRecord]]:
    limiter = asyncio.Semaphore(max_concurrency) if max_concurrency else None
    tasks = [
        asyncio.create_task(_repository_contributors(source, repo, limiter), name=f"contributors:{repo.full_name}")
        for repo in repos
    ]
    try:
        # gather keeps the input order, whatever the completion order.
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        raise


def rank_contributors(per_repository: list[list[ContributorRecord]]) -> list[RankedContributor]:
    """Flatten in repository order and sort by contributions, highest first.

    sorted() is stable, so equal counts keep their flattened order.
    """
    flattened = [RankedContributor.from_record(record) for records in per_repository for record in records]
    return sorted(flattened, key=lambda c: c.contributions, reverse=True)


async def aggregate(
    source: GitHubSource,
    org: str,
    max_concurrency: Optional[int] = None,
) -> list[RankedContributor]:
    """Contributors of every repository of ``org``, ranked by contribution count.

    Any failing listing fails the whole aggregation with AggregationError; the
    results of listings that did succeed are discarded.
    """
    log.info("contributor_ranking_start org=%s", org)
    started = time.perf_counter()
    try:
        repos = await list_repositories(source, org)
        per_repository = await _gather_contributors(source, repos, max_concurrency)
    except FetchError as exc:
        log.warning("contributor_ranking_failed org=%s error=%s", org, exc)
        raise AggregationError(org, exc) from exc

    ranked = rank_contributors(per_repository)
    log.info(
        "contributor_ranking_done org=%s repositories=%s contributors=%s elapsed_ms=%.2f",
        org,
        len(repos),
        len(ranked),
        (time.perf_counter() - started) * 1000.0,
    )
    return ranked
