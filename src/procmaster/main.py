"""Command line entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from procmaster.adapters.sqlalchemy.migrations import upgrade_head
from procmaster.app import enrich_tender_sizes, master_body_groups, master_tender_groups
from procmaster.config import ConfigurationError, configure_logging, get_app_config
from procmaster.domain.mastering.sources import BODY_SOURCES, TENDER_SOURCES

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Master procurement tenders and bodies")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    tenders = subparsers.add_parser("master-tenders", help="Master tender groups")
    tenders.add_argument("--source", required=True, choices=sorted(TENDER_SOURCES))
    tenders.add_argument("group_ids", nargs="+", metavar="GROUP_ID")

    bodies = subparsers.add_parser("master-bodies", help="Master body groups")
    bodies.add_argument("--source", required=True, choices=sorted(BODY_SOURCES))
    bodies.add_argument("group_ids", nargs="+", metavar="GROUP_ID")

    size = subparsers.add_parser("tender-size", help="Compute the size of master tenders")
    size.add_argument("tender_ids", nargs="+", metavar="TENDER_ID")

    db = subparsers.add_parser("db", help="Database maintenance")
    db_sub = db.add_subparsers(dest="db_command", required=True)
    db_sub.add_parser("upgrade", help="Apply pending schema migrations")

    return parser.parse_args(list(argv))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        config = get_app_config()
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(2)

    failed: list[str] = []
    try:
        if parsed_args.command == "master-tenders":
            results = master_tender_groups(
                parsed_args.group_ids, source=parsed_args.source, config=config
            )
            failed = [result.group_id for result in results if not result.succeeded]
        elif parsed_args.command == "master-bodies":
            results = master_body_groups(
                parsed_args.group_ids, source=parsed_args.source, config=config
            )
            failed = [result.group_id for result in results if not result.succeeded]
        elif parsed_args.command == "tender-size":
            runs = enrich_tender_sizes(parsed_args.tender_ids, config=config)
            failed = [run.tender_id for run in runs if not run.succeeded]
        elif parsed_args.command == "db" and parsed_args.db_command == "upgrade":
            upgrade_head(database_uri=config.database.uri)
            log.info("Database schema is up to date")
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except Exception:
        log.exception("Fatal error during %s", parsed_args.command)
        sys.exit(1)

    if failed:
        log.error("Failed ids: %s", ", ".join(failed))
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.warning("Interrupted by user")
    sys.exit(130)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
