from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from rnaxref.app import initialise_database, reconcile_cross_references
from rnaxref.config import ConfigurationError, configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not an integer: {value}") from exc
    if parsed < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return parsed


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Reconcile RNAcentral cross references against the local gene store"
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug messages (per-line no-match details, QC steps)",
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        help="Directory for the multimatch/inserted/deleted audit logs",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    run = subparsers.add_parser("run", help="Reconcile cross references for all species")
    run.add_argument(
        "--species",
        action="append",
        help="Common name of a species to process (repeatable; defaults to all searchable)",
    )
    run.add_argument(
        "--workers",
        type=_positive_int,
        help="Number of species processed in parallel (defaults to config / CPU count)",
    )

    subparsers.add_parser("init-db", help="Create the database schema")

    return parser.parse_args(list(argv))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    load_dotenv()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(
        level=logging.DEBUG if parsed_args.verbose else logging.INFO,
        log_dir=parsed_args.log_dir,
    )

    try:
        if parsed_args.command == "run":
            reconcile_cross_references(
                species_names=parsed_args.species,
                max_workers=parsed_args.workers,
            )
        elif parsed_args.command == "init-db":
            log.info("Database ready: %s", initialise_database())
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during reconciliation")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


if __name__ == "__main__":
    signal(SIGINT, sigint_handler)
    main()
