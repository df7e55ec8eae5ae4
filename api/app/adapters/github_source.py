"""GitHubSource abstraction: the two page listings the ranking depends on.

Implementations: app.services.github_client.GitHubClient (REST), test fakes.
"""

from __future__ import annotations

from typing import Protocol

from app.models.github_ranking import ContributorDescriptor, Page, RepositoryDescriptor


class GitHubSource(Protocol):
    """Protocol for page-level GitHub access. Page indices are zero-based."""

    async def list_org_repos_page(
        self, owner: str, page_index: int, per_page: int = ...
    ) -> Page[RepositoryDescriptor]:
        ...

    async def list_repo_contributors_page(
        self, owner: str, repo: str, page_index: int, per_page: int = ...
    ) -> Page[ContributorDescriptor]:
        ...
