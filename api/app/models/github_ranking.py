"""Models for ranking GitHub organization contributors.

Transport-facing descriptors mirror the GitHub REST payloads we read; the
ranking models are what the aggregation produces and the API returns.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One chunk of a listing plus whether another chunk follows."""

    items: list[T] = field(default_factory=list)
    has_next: bool = False


class RepositoryDescriptor(BaseModel):
    """Repository item from GET /orgs/{org}/repos."""

    model_config = ConfigDict(frozen=True)

    name: str
    owner_login: Optional[str] = None


class ContributorDescriptor(BaseModel):
    """Contributor item from GET /repos/{owner}/{repo}/contributors."""

    model_config = ConfigDict(frozen=True)

    login: str
    contributions: int = Field(default=0, ge=0)


class RepositoryRef(BaseModel):
    """Identifies one repository during a single aggregation run."""

    model_config = ConfigDict(frozen=True)

    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


class ContributorRecord(BaseModel):
    """Contributor of one repository, as returned by the listing."""

    model_config = ConfigDict(frozen=True)

    name: str  # GitHub login
    contributions: int = Field(default=0, ge=0)


class RankedContributor(BaseModel):
    """Output entry of the ranking; one per (repository, contributor) pair."""

    name: str
    contributions: int = Field(ge=0)

    @classmethod
    def from_record(cls, record: ContributorRecord) -> "RankedContributor":
        return cls(name=record.name, contributions=record.contributions)


class ContributorRankingResponse(BaseModel):
    """GET /org/{org_name}/contributors success body."""

    result: list[RankedContributor]
    error: str = ""


class ContributorRankingFailure(BaseModel):
    """GET /org/{org_name}/contributors failure body (HTTP 418)."""

    result: str = ""
    error: str
