#!/usr/bin/env python3
# ==============================================================================
#  pgnrelay - main.py
#  Purpose: one-shot runner: broadcast round → PGN file (or stdout)
#
#  Usage:
#    python -m pgnrelay.main chessdotcom:<event_id>/<round_slug> \
#        [--name NAME] [--output FILE] [--skip-failed] [--metrics-port PORT]
# ==============================================================================

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, List, Optional, TypeVar

from pgnrelay.ingestion.fetch_broadcast import fetch_chessdotcom
from pgnrelay.utils.config_utils import get_metrics_port
from pgnrelay.utils.logging_utils import setup_logger
from pgnrelay.utils.metrics import start_metrics_server

logger = setup_logger("main")

T = TypeVar("T")

_LOGGER_NAMES = (
    "main",
    "fetch_broadcast",
    "event_resolver",
    "game_converter",
    "chessbomb_client",
    "metrics",
)

# ------------------------------------------------------------------------------
# Stage Wrapper
# ------------------------------------------------------------------------------


def _stage(title: str, fn: Callable[[], T]) -> T:
    """
    Run a stage with start → finish logging and full stacktrace on error.
    """
    logger.info("%s – started", title)
    try:
        result = fn()
        logger.info("%s – finished", title)
        return result
    except Exception:
        logger.exception("%s – failed", title)
        raise


# ------------------------------------------------------------------------------
# CLI
# ------------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="pgnrelay",
        description="Fetch a chess.com broadcast round and print it as PGN.",
    )
    ap.add_argument("url", help="chessdotcom:<event_id>/<round_slug>")
    ap.add_argument("--name", default=None, help="display name (default: the url)")
    ap.add_argument("--output", "-o", type=Path, default=None, help="write PGN here")
    ap.add_argument(
        "--skip-failed",
        action="store_true",
        default=None,
        help="skip games that fail instead of aborting the round",
    )
    ap.add_argument("--metrics-port", type=int, default=None)
    ap.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    level = getattr(logging, args.log_level)
    for name in _LOGGER_NAMES:
        logging.getLogger(name).setLevel(level)

    port = args.metrics_port if args.metrics_port is not None else get_metrics_port()
    if port is not None:
        start_metrics_server(port)

    try:
        pgn = _stage(
            "Broadcast fetch",
            lambda: fetch_chessdotcom(
                args.name or args.url, args.url, skip_failed_games=args.skip_failed
            ),
        )
    except Exception:
        return 1

    if args.output:
        args.output.write_text(pgn, encoding="utf-8")
        logger.info("Wrote %d characters to %s", len(pgn), args.output)
    else:
        sys.stdout.write(pgn)
    return 0


if __name__ == "__main__":
    sys.exit(main())
