#!/usr/bin/env python3
# ==============================================================================
# fetch_broadcast.py
# ------------------------------------------------------------------------------
# Turns a `chessdotcom:<event_id>/<round_slug>` source into one PGN blob.
#
# Execution flow:
#   1. Parse event id and round slug from the source string
#   2. Fetch the event metadata and resolve the round (one request)
#   3. For each game of that round, in upstream order, fetch + convert it
#      (one request per game, strictly sequential)
#   4. Join the games, each followed by a blank line
#
# Failure policy:
#   • default      → the first failing game aborts the whole round
#   • skip_failed  → a failing game is logged and skipped
# ==============================================================================

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from pgnrelay.conversion.game_converter import convert_game
from pgnrelay.errors import SourceUrlError
from pgnrelay.ingestion.event_resolver import resolve_round
from pgnrelay.source.chessbomb_client import ChessBombClient
from pgnrelay.utils import metrics
from pgnrelay.utils.config_utils import get_skip_failed_games
from pgnrelay.utils.logging_utils import setup_logger

LOGGER = setup_logger("fetch_broadcast", level=logging.INFO)

SOURCE_PREFIX = "chessdotcom:"
GAME_SEPARATOR = "\n\n"


def parse_source_url(url: str) -> Tuple[str, str]:
    """
    Split "chessdotcom:<event_id>/<round_slug>" into its two parts.

    Segments after the round slug are ignored.
    """
    if not url.startswith(SOURCE_PREFIX):
        raise SourceUrlError(url, f"expected prefix '{SOURCE_PREFIX}'")

    segments = url[len(SOURCE_PREFIX):].split("/")
    if len(segments) < 2 or not segments[0] or not segments[1]:
        raise SourceUrlError(url, "expected '<event_id>/<round_slug>'")

    return segments[0], segments[1]


def fetch_chessdotcom(
    name: str,
    url: str,
    client: Optional[ChessBombClient] = None,
    skip_failed_games: Optional[bool] = None,
) -> str:
    """
    Fetch every game of one broadcast round as concatenated PGN.

    Parameters
    ----------
    name : str
        Display name of the source (used for logging only).
    url : str
        "chessdotcom:<event_id>/<round_slug>".
    client : ChessBombClient | None
        Upstream client (default: a fresh one built from env settings).
    skip_failed_games : bool | None
        Continue past a failing game instead of aborting
        (default: RELAY_SKIP_FAILED_GAMES).
    """
    event_id, round_slug = parse_source_url(url)
    client = client or ChessBombClient()
    if skip_failed_games is None:
        skip_failed_games = get_skip_failed_games()

    LOGGER.info("Fetching '%s' – event %s, round '%s'", name, event_id, round_slug)
    resolved = resolve_round(client, event_id, round_slug)
    games = resolved.round_games()
    LOGGER.info("Round '%s' has %d game(s)", round_slug, len(games))

    chunks: List[str] = []
    skipped: List[str] = []

    for game in games:
        try:
            with metrics.conversion_timer():
                pgn = convert_game(client, event_id, round_slug, game.slug, resolved.event)
        except Exception as exc:
            metrics.record_game(ok=False)
            if not skip_failed_games:
                LOGGER.error("Game %s failed – aborting round: %s", game.slug, exc)
                raise
            LOGGER.warning("Game %s failed – skipped: %s", game.slug, exc)
            skipped.append(game.slug)
            continue

        metrics.record_game(ok=True)
        chunks.append(pgn + GAME_SEPARATOR)

    LOGGER.info(
        "Done '%s' – %d converted, %d skipped", name, len(chunks), len(skipped)
    )
    return "".join(chunks)
