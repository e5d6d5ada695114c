from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from xliffsync import __version__
from xliffsync.app import merge_translations
from xliffsync.config import (
    CommandOptions,
    MergeParameters,
    configure_logging,
    level_from_name,
    log_level_from_env,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="xliffsync",
        description="Merge the extracted master catalog into the per-language catalogs",
    )
    parser.add_argument(
        "-p",
        "--profile",
        type=str,
        help="Path to the profile JSON file (defaults to $XLIFFSYNC_PROFILE)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug output and show all parameters",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only show errors",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "languages",
        nargs="*",
        help="Language codes to process (override the profile)",
    )
    return parser.parse_args(list(argv))


def _log_level(args: argparse.Namespace) -> int:
    if args.quiet:
        return logging.ERROR
    if args.verbose:
        return logging.DEBUG
    return level_from_name(log_level_from_env())


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=_log_level(parsed_args), force=True)

    options = CommandOptions(
        languages=tuple(parsed_args.languages),
        profile_path=parsed_args.profile,
        verbose=parsed_args.verbose,
        quiet=parsed_args.quiet,
    )
    try:
        parameters = MergeParameters.create(options)
        if parameters.quiet and not parsed_args.quiet:
            logging.getLogger().setLevel(logging.ERROR)
        elif parameters.verbose and not parsed_args.verbose:
            logging.getLogger().setLevel(logging.DEBUG)
        status = merge_translations(parameters)
    except Exception:
        log.exception("Fatal error during merge")
        sys.exit(1)
    sys.exit(status)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
