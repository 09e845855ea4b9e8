"""CLI 入口。"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from sqlalchemy.exc import SQLAlchemyError

from trip_timeline.config import ConfigError, load_app_config, resolve_log_level
from trip_timeline.db.seed import seed_demo_trip
from trip_timeline.db.sqlite_client import DatabaseReadError
from trip_timeline.domain.timeline_types import OutputMode, TimelineResult
from trip_timeline.formatters.timeline_json import render_timeline_json
from trip_timeline.formatters.timeline_pretty import render_timeline_pretty
from trip_timeline.services.timeline_service import TripNotFoundError, get_timeline

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """构建命令行参数解析器。"""

    parser = argparse.ArgumentParser(prog="trip-timeline", description="Trip timeline layout CLI")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    layout_parser = subparsers.add_parser(
        "layout",
        help="Lay out a trip's entries on a day-by-day timeline.",
    )
    layout_parser.add_argument(
        "--trip-id",
        required=True,
        help="Trip identifier.",
    )
    layout_parser.add_argument(
        "--db-path",
        help="Path to the trip planner sqlite database file.",
    )
    layout_parser.add_argument(
        "--timezone",
        help="IANA display timezone, e.g. UTC. Defaults to the system timezone.",
    )
    layout_parser.add_argument(
        "--output",
        choices=["pretty", "json", "both"],
        default="pretty",
        help="Output format.",
    )
    layout_parser.add_argument(
        "--no-emoji",
        action="store_true",
        help="Disable emoji in pretty output.",
    )

    seed_parser = subparsers.add_parser(
        "seed",
        help="Recreate the trip tables and insert a demo trip.",
    )
    seed_parser.add_argument(
        "--db-path",
        help="Path to the sqlite database file to (re)create.",
    )

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """CLI 主入口。"""

    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        _setup_logging(args.verbose)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.command == "layout":
        return _run_layout(args)
    if args.command == "seed":
        return _run_seed(args)

    parser.print_help()
    return 1


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=resolve_log_level(verbose),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _run_layout(args: argparse.Namespace) -> int:
    output = args.output
    assert output in {"pretty", "json", "both"}

    try:
        timeline = get_timeline(
            trip_id=args.trip_id,
            db_path=args.db_path,
            timezone_name=args.timezone,
        )
    except (ConfigError, DatabaseReadError, TripNotFoundError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    output_mode: OutputMode = output
    _render_output(timeline=timeline, output=output_mode, emoji=not args.no_emoji)
    return 0


def _run_seed(args: argparse.Namespace) -> int:
    try:
        db_path = load_app_config(db_path=args.db_path, require_db=False).db_path
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    try:
        trip_id = seed_demo_trip(db_path)
    except SQLAlchemyError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    logger.info("Seeded demo trip %s into %s", trip_id, db_path)
    print(f"Seeded demo trip {trip_id} into {db_path}")
    return 0


def _render_output(timeline: TimelineResult, output: OutputMode, emoji: bool) -> None:
    if output in ("pretty", "both"):
        print(render_timeline_pretty(timeline, emoji=emoji))
    if output == "both":
        print()
    if output in ("json", "both"):
        print(render_timeline_json(timeline))


if __name__ == "__main__":
    raise SystemExit(main())
