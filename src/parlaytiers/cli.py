"""Command line entry point for tiered parlay generation."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date

from parlaytiers.config import get_settings
from parlaytiers.errors import InsufficientPoolError, PersistenceError
from parlaytiers.parlays.tiers import TIER_ORDER

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="parlaytiers", description=__doc__)
    sub = parser.add_subparsers(dest="command", required=True)

    generate = sub.add_parser("generate", help="Build and persist tiered parlays for a slate.")
    generate.add_argument("--pool", required=True, help="Candidate pool JSON file.")
    generate.add_argument("--date", type=date.fromisoformat, default=None, help="Slate date (YYYY-MM-DD).")
    generate.add_argument("--tier", choices=TIER_ORDER, action="append", help="Restrict to one or more tiers.")
    generate.add_argument("--init-db", action="store_true", help="Create tables before running.")

    sub.add_parser("serve", help="Run the HTTP API.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=get_settings().log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "serve":
        from parlaytiers.api.main import main as serve

        serve()
        return 0

    from parlaytiers.db.database import init_db
    from parlaytiers.scheduling.jobs import run_daily_job

    if args.init_db:
        init_db()
    try:
        summary = run_daily_job(args.pool, target_date=args.date, tiers=args.tier)
    except InsufficientPoolError as exc:
        logger.error("%s", exc)
        print(json.dumps({"success": False, "message": str(exc), "pool_size": exc.pool_size}))
        return 2
    except PersistenceError as exc:
        logger.error("%s", exc)
        print(json.dumps({"success": False, "error": str(exc), **exc.summary.to_dict()}, default=str))
        return 1
    print(json.dumps({"success": True, **summary}, indent=2, default=str))
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
