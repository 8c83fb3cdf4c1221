from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Optional

from .config import load_settings
from .logger import clean_old_logs, configure_logging
from .types import LotteryType, Timeframe

logger = logging.getLogger("sglotto.cli")


def _init_db(args: argparse.Namespace) -> int:
    from .db import init_db
    from .services.schedule import ScheduleRepository

    init_db()
    seeded = ScheduleRepository().ensure_defaults()
    logger.info("Database and tables initialised (%d schedule row(s) seeded).", seeded)
    return 0


def _stats(args: argparse.Namespace) -> int:
    from .actions import fetch_stats

    stats = asyncio.run(fetch_stats(LotteryType(args.lottery_type), Timeframe(args.timeframe)))
    json.dump(stats, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


def _clean_logs(args: argparse.Namespace) -> int:
    settings = load_settings(args.env_file)
    retention = args.retention_days
    if retention is None:
        retention = settings.logging.retention_days
    removed = clean_old_logs(settings.logging.log_dir, retention_days=retention)
    logger.info("Removed %d old log file(s).", len(removed))
    return 0


def _serve(args: argparse.Namespace) -> int:
    from .app import create_app

    settings = load_settings(args.env_file)
    app = create_app()
    app.run(host=args.host, port=args.port, debug=settings.flask.debug)
    return 0


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="SG Lotto results service tools")
    parser.add_argument("--env-file", help="Path to a .env file to load", default=None)
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    init_parser = sub.add_parser("init-db", help="Create database tables")
    init_parser.set_defaults(handler=_init_db)

    stats_parser = sub.add_parser("stats", help="Print hot/cold statistics as JSON")
    stats_parser.add_argument("lottery_type", choices=[t.value for t in LotteryType])
    stats_parser.add_argument(
        "--timeframe",
        choices=[t.value for t in Timeframe],
        default=Timeframe.THIRTY_DAYS.value,
    )
    stats_parser.set_defaults(handler=_stats)

    clean_parser = sub.add_parser("clean-logs", help="Delete rotated logs past the retention window")
    clean_parser.add_argument("--retention-days", type=int, default=None)
    clean_parser.set_defaults(handler=_clean_logs)

    serve_parser = sub.add_parser("serve", help="Run the development server")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=5000)
    serve_parser.set_defaults(handler=_serve)

    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    settings = load_settings(args.env_file)
    configure_logging(settings.logging, verbose=args.verbose)
    return args.handler(args)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
