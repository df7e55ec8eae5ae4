"""Error taxonomy for contributor ranking.

Every error carries a human-readable context and, optionally, the error that
caused it. ``str(error)`` renders the whole chain, e.g.
``Unable to fetch acme repositories: GitHub API error 404 for https://...``.
"""

from __future__ import annotations

from typing import Optional


class GitHubRankError(RuntimeError):
    def __init__(self, context: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(context)
        self.context = context
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is None:
            return self.context
        return f"{self.context}: {self.cause}"


class TransportError(GitHubRankError):
    """A single page fetch failed (network, HTTP status, undecodable body)."""

    def __init__(
        self,
        context: str,
        cause: Optional[BaseException] = None,
        *,
        status: Optional[int] = None,
        url: Optional[str] = None,
    ) -> None:
        super().__init__(context, cause)
        self.status = status
        self.url = url


class DataError(GitHubRankError):
    """A page decoded fine but one of its records is unusable (e.g. no owner)."""


class FetchError(GitHubRankError):
    """A paginated listing was aborted; context names the listing."""


class AggregationError(GitHubRankError):
    """Surfaced to the HTTP layer when any listing of an organization fails."""

    def __init__(self, organization: str, cause: GitHubRankError) -> None:
        # The listing error already names the organization or repository.
        super().__init__(cause.context, cause.cause)
        self.organization = organization
        self.listing_error = cause
