"""Pydantic models."""

from app.models.error import ErrorDetail
from app.models.github_ranking import (
    ContributorDescriptor,
    ContributorRankingFailure,
    ContributorRankingResponse,
    ContributorRecord,
    Page,
    RankedContributor,
    RepositoryDescriptor,
    RepositoryRef,
)

__all__ = [
    "ContributorDescriptor",
    "ContributorRankingFailure",
    "ContributorRankingResponse",
    "ContributorRecord",
    "ErrorDetail",
    "Page",
    "RankedContributor",
    "RepositoryDescriptor",
    "RepositoryRef",
]
