from __future__ import annotations

from fastapi import APIRouter, Depends, Path, Request
from fastapi.responses import JSONResponse

from app.adapters.github_source import GitHubSource
from app.models.github_ranking import ContributorRankingFailure, ContributorRankingResponse
from app.services import contributor_ranking_service, github_config
from app.services.github_errors import AggregationError

router = APIRouter()

RANKING_FAILED_STATUS = 418


def get_github_source(request: Request) -> GitHubSource:
    return request.app.state.github_client


@router.get(
    "/org/{org_name}/contributors",
    response_model=ContributorRankingResponse,
    responses={
        200: {
            "description": "Contributors of every repository, highest contribution count first",
            "content": {
                "application/json": {
                    "example": {
                        "result": [
                            {"name": "octocat", "contributions": 356},
                            {"name": "hubot", "contributions": 50},
                        ],
                        "error": "",
                    }
                }
            },
        },
        RANKING_FAILED_STATUS: {
            "model": ContributorRankingFailure,
            "description": "Unable to fetch repositories or contributors",
            "content": {
                "application/json": {
                    "example": {"result": "", "error": "Unable to fetch acme repositories: GitHub API error 404"}
                }
            },
        },
    },
)
async def get_org_contributors(
    org_name: str = Path(..., min_length=1, description="GitHub organization login"),
    source: GitHubSource = Depends(get_github_source),
):
    """Rank contributors across all repositories of an organization."""
    try:
        ranked = await contributor_ranking_service.aggregate(
            source,
            org_name,
            max_concurrency=github_config.contributor_fetch_concurrency(),
        )
    except AggregationError as exc:
        body = ContributorRankingFailure(error=str(exc))
        return JSONResponse(status_code=RANKING_FAILED_STATUS, content=body.model_dump())
    return ContributorRankingResponse(result=ranked)
