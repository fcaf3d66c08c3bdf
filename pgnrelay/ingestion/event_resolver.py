# ==============================================================================
# event_resolver.py  –  Round lookup inside one broadcast event
#
# Fetches the event metadata once and finds the round by slug. The first
# round with a matching slug wins.
# ==============================================================================

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from pgnrelay.errors import RoundNotFoundError
from pgnrelay.source.chessbomb_client import ChessBombClient
from pgnrelay.source.models import EventMetadata, GameSummary, Round
from pgnrelay.utils.logging_utils import setup_logger

LOGGER = setup_logger("event_resolver", level=logging.INFO)


@dataclass(frozen=True)
class ResolvedRound:
    round: Round
    event: EventMetadata

    def round_games(self) -> List[GameSummary]:
        return self.event.games_in_round(self.round.id)


def find_round(rounds: Iterable[Round], round_slug: str) -> Optional[Round]:
    """First round whose slug equals `round_slug`, else None."""
    return next((r for r in rounds if r.slug == round_slug), None)


def resolve_round(
    client: ChessBombClient, event_id: str, round_slug: str
) -> ResolvedRound:
    """
    Fetch `event_id` and locate `round_slug` in it.

    Raises
    ------
    RoundNotFoundError
        No round of the event has this slug.
    """
    # TODO: cache event metadata per event id; rounds and pairings rarely change
    event = client.fetch_event(event_id)
    match = find_round(event.rounds, round_slug)
    if match is None:
        LOGGER.error("Round '%s' not found in event %s", round_slug, event_id)
        raise RoundNotFoundError(round_slug, event_id)

    LOGGER.info("Resolved round '%s' → id %s", round_slug, match.id)
    return ResolvedRound(round=match, event=event)
