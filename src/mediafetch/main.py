#!/usr/bin/env python3

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from mediafetch.app import fetch_media
from mediafetch.config import FAMILIES, configure_logging, get_family

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Resolve artwork images, book covers and video thumbnails into a cache file"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log per-source details",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    for family in FAMILIES.values():
        sub = subparsers.add_parser(
            family.name,
            help=f"Fetch media for {family.name} ({' > '.join(family.source_names)})",
        )
        sub.add_argument(
            "--input",
            type=Path,
            help=f"Entity list JSON (default: <data dir>/{family.input_filename})",
        )
        sub.add_argument(
            "--cache",
            type=Path,
            help=f"Cache file to update (default: <data dir>/{family.cache_filename})",
        )
        sub.add_argument(
            "--delay",
            type=float,
            help=f"Seconds to wait after each lookup (default: {family.delay_seconds})",
        )
        sub.add_argument(
            "--checkpoint-every",
            type=int,
            help="Also write the cache after every N lookups",
        )
        sub.add_argument(
            "--strict-priority",
            action=argparse.BooleanOptionalAction,
            default=None,
            help="Only skip cached records that came from the top-priority source",
        )

    return parser.parse_args(list(argv))


def _validate(args: argparse.Namespace) -> None:
    if args.delay is not None and args.delay < 0:
        raise ValueError("Delay must be non-negative")
    if args.checkpoint_every is not None and args.checkpoint_every <= 0:
        raise ValueError("Checkpoint interval must be positive")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        _validate(parsed_args)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        fetch_media(
            get_family(parsed_args.command),
            input_path=parsed_args.input,
            cache_path=parsed_args.cache,
            delay_seconds=parsed_args.delay,
            checkpoint_every=parsed_args.checkpoint_every,
            strict_priority=parsed_args.strict_priority,
        )
    except Exception:
        log.exception("Fatal error during %s run", parsed_args.command)
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C); progress since the last save is lost")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
