# ==============================================================================
# game_converter.py  –  Broadcast move list → annotated PGN
# ------------------------------------------------------------------------------
# Steps per game:
#   1. Decode each `cbn` field ("e2e4_e4") to its SAN half
#   2. Replay the SAN moves on a python-chess board (illegal → raise)
#   3. Attach a `[%clk h:m:s]` comment to every move
#   4. Set the Event / White / Black / Elo / TimeControl / Round / Result tags
#   5. Export PGN text
# ==============================================================================

from __future__ import annotations

import logging
from typing import Iterable, Optional

import chess
import chess.pgn

from pgnrelay.conversion.pgn_export import export_pgn
from pgnrelay.errors import MoveDecodeError
from pgnrelay.source.chessbomb_client import ChessBombClient
from pgnrelay.source.models import EventMetadata, GameDetail, Move
from pgnrelay.utils.logging_utils import setup_logger

LOGGER = setup_logger("game_converter", level=logging.INFO)

CBN_DELIMITER = "_"
UNKNOWN_TAG_VALUE = "?"

# python-chess pre-fills these with "?" placeholders; the broadcast has no
# value for them.
_PLACEHOLDER_TAGS = ("Site", "Date")

# ------------------------------------------------------------------------------
# Move decoding & clock formatting
# ------------------------------------------------------------------------------


def decode_cbn(cbn: str) -> str:
    """
    Return the SAN half of a "<lan>_<san>" move encoding.

    Example: "e2e4_e4" → "e4", "g1f3_Nf3" → "Nf3". Only the second field
    is used; anything after a further delimiter is ignored.
    """
    fields = cbn.split(CBN_DELIMITER)
    if len(fields) < 2 or not fields[1]:
        raise MoveDecodeError(cbn)
    return fields[1]


def format_clock(ms: int) -> str:
    """Elapsed clock in ms → "h:m:s" (truncated, no zero padding)."""
    ms = int(ms)
    hours = ms // 3_600_000
    minutes = ms // 60_000 % 60
    seconds = ms // 1000 % 60
    return f"{hours}:{minutes}:{seconds}"


def clock_comment(ms: int) -> str:
    return f"[%clk {format_clock(ms)}]"


# ------------------------------------------------------------------------------
# Replay & headers
# ------------------------------------------------------------------------------


def replay_moves(moves: Iterable[Move]) -> chess.pgn.Game:
    """
    Replay `moves` from the initial position, in the order given.

    Raises
    ------
    MoveDecodeError
        A `cbn` field has no SAN part.
    ValueError
        python-chess rejected a move (IllegalMoveError, InvalidMoveError,
        AmbiguousMoveError).
    """
    game = chess.pgn.Game()
    board = chess.Board()
    node: chess.pgn.GameNode = game

    for move in moves:
        san = decode_cbn(move.cbn)
        played = board.push_san(san)
        node = node.add_variation(played)
        node.comment = clock_comment(move.clock)

    return game


def _elo_tag(elo: Optional[int]) -> str:
    return UNKNOWN_TAG_VALUE if elo is None else str(elo)


def apply_headers(
    game: chess.pgn.Game, event: EventMetadata, detail: GameDetail, round_slug: str
) -> None:
    """Set the PGN tag pairs for one broadcast game."""
    summary = detail.game
    for tag in _PLACEHOLDER_TAGS:
        game.headers.pop(tag, None)

    game.headers["Event"] = event.name
    game.headers["White"] = summary.white.name
    game.headers["Black"] = summary.black.name
    game.headers["WhiteElo"] = _elo_tag(summary.white_elo)
    game.headers["BlackElo"] = _elo_tag(summary.black_elo)
    game.headers["TimeControl"] = event.room.time_control
    game.headers["Round"] = round_slug
    game.headers["Result"] = summary.result

    if summary.white.title:
        game.headers["WhiteTitle"] = summary.white.title
    if summary.black.title:
        game.headers["BlackTitle"] = summary.black.title


# ------------------------------------------------------------------------------
# Public entry points
# ------------------------------------------------------------------------------


def build_game_pgn(detail: GameDetail, event: EventMetadata, round_slug: str) -> str:
    """Replay `detail`, tag it, and return its PGN text."""
    game = replay_moves(detail.moves)
    apply_headers(game, event, detail, round_slug)
    return export_pgn(game)


def convert_game(
    client: ChessBombClient,
    event_id: str,
    round_slug: str,
    game_slug: str,
    event: EventMetadata,
) -> str:
    """Fetch one game and convert it to PGN. Every failure propagates."""
    detail = client.fetch_game(event_id, round_slug, game_slug)
    pgn = build_game_pgn(detail, event, round_slug)
    LOGGER.info(
        "Converted %s: %s – %s (%d plies)",
        game_slug,
        detail.game.white.name,
        detail.game.black.name,
        len(detail.moves),
    )
    return pgn
