#!/usr/bin/env python
"""
Serve the CLKK signup funnel.

Reads SUPABASE_URL, SUPABASE_ANON_KEY and SUPABASE_SERVICE_ROLE_KEY from
the environment (or backend/.env); startup fails without them, since the
lifespan connects both Supabase clients and restores the session.

Usage (from backend/):
    python run_api.py
    python run_api.py --reload --log-level debug
    python run_api.py --poll-interval 1  # faster verification checks
"""

import argparse
import os

import uvicorn

from shared.config import get_settings


def main():
    parser = argparse.ArgumentParser(description="Serve the CLKK signup funnel API")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    parser.add_argument("--host", type=str, help="Bind address (default: HOST setting)")
    parser.add_argument("--port", type=int, help="Bind port (default: PORT setting)")
    parser.add_argument("--log-level", type=str, help="Override LOG_LEVEL")
    parser.add_argument(
        "--poll-interval",
        type=float,
        help="Seconds between email verification checks",
    )
    args = parser.parse_args()

    # settings are read by the app process, which may be a reload worker
    if args.log_level:
        os.environ["LOG_LEVEL"] = args.log_level.upper()
    if args.poll_interval is not None:
        os.environ["VERIFICATION_POLL_INTERVAL"] = str(args.poll_interval)
    get_settings.cache_clear()
    settings = get_settings()

    uvicorn.run(
        "api:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=args.reload or settings.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
