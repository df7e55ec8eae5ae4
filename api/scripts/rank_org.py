#!/usr/bin/env python3
"""Print the contributor ranking of a GitHub organization.

Usage:
  python scripts/rank_org.py ORG [--top N] [--json] [--concurrency N] [-v]

Exit code 1 when any repository or contributor listing fails.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys

from dotenv import load_dotenv

_api_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, _api_dir)
load_dotenv(os.path.join(_api_dir, ".env"))

from app.services import github_config
from app.services.contributor_ranking_service import aggregate
from app.services.github_client import GitHubClient
from app.services.github_errors import AggregationError

log = logging.getLogger(__name__)


async def _rank(org: str, concurrency: int | None):
    async with GitHubClient() as client:
        return await aggregate(client, org, max_concurrency=concurrency)


def main() -> int:
    ap = argparse.ArgumentParser(description="Rank contributors across an organization's repositories")
    ap.add_argument("org", help="GitHub organization login")
    ap.add_argument("--top", type=int, default=0, help="Only print the first N entries (0 = all)")
    ap.add_argument("--json", action="store_true", help="Print the API response body instead of a table")
    ap.add_argument(
        "--concurrency",
        type=int,
        default=github_config.contributor_fetch_concurrency() or 0,
        help="Max concurrent contributor listings (0 = one per repository)",
    )
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    if not github_config.github_token():
        log.warning("GH_TOKEN not set; using unauthenticated GitHub API (low rate limit)")

    try:
        ranked = asyncio.run(_rank(args.org, args.concurrency or None))
    except AggregationError as exc:
        if args.json:
            print(json.dumps({"result": "", "error": str(exc)}))
        else:
            print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.top > 0:
        ranked = ranked[: args.top]
    if args.json:
        print(json.dumps({"result": [c.model_dump() for c in ranked], "error": ""}, indent=2))
        return 0
    width = max((len(c.name) for c in ranked), default=4)
    for position, contributor in enumerate(ranked, start=1):
        print(f"{position:>4}  {contributor.name:<{width}}  {contributor.contributions:>7}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
