#!/usr/bin/env python3
"""Run the contributor ranking API with uvicorn.

Usage:
  python scripts/serve.py [--host 0.0.0.0] [--port 8080] [--reload]

GH_TOKEN (or GITHUB_TOKEN) is read from the environment or api/.env.
"""

from __future__ import annotations

import argparse
import os
import sys

import uvicorn
from dotenv import load_dotenv

_api_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, _api_dir)
load_dotenv(os.path.join(_api_dir, ".env"))


def main() -> None:
    ap = argparse.ArgumentParser(description="Serve GET /org/{org_name}/contributors")
    ap.add_argument("--host", default=os.getenv("HOST", "0.0.0.0"))
    ap.add_argument("--port", type=int, default=int(os.getenv("PORT", "8080")))
    ap.add_argument("--reload", action="store_true", help="Reload on code changes (development)")
    args = ap.parse_args()

    print(f"Listening on {args.host}:{args.port}, docs at http://localhost:{args.port}/swagger-ui")
    uvicorn.run("app.main:app", host=args.host, port=args.port, reload=args.reload, app_dir=_api_dir)


if __name__ == "__main__":
    main()
