# ==============================================================================
# chessbomb_client.py  –  HTTP client for the chess.com broadcast backend
# ------------------------------------------------------------------------------
# The broadcast pages load their data from nxt.chessbomb.com with POST
# requests. The API only answers requests that look like they come from a
# browser, so every request carries a fixed set of browser headers.
#
# Endpoints:
#   POST /events/api/room/<event_id>                          → EventMetadata
#   POST /events/api/game/<event_id>/<round_slug>/<game_slug> → GameDetail
#
# One request per call. No retries and no caching; HTTP and JSON errors
# propagate to the caller as `requests` exceptions.
# ==============================================================================

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from pgnrelay.source.models import EventMetadata, GameDetail
from pgnrelay.utils import metrics
from pgnrelay.utils.config_utils import get_base_url, get_http_timeout, get_user_agent
from pgnrelay.utils.logging_utils import setup_logger

LOGGER = setup_logger("chessbomb_client", level=logging.INFO)

ROOM_ENDPOINT = "room"
GAME_ENDPOINT = "game"


def build_browser_headers(user_agent: str) -> Dict[str, str]:
    """Headers that make our requests look like the chess.com web client."""
    return {
        "User-Agent": user_agent,
        "Accept": "application/json, text/plain, */*",
        "Accept-Language": "en-US,en;q=0.5",
        "Accept-Encoding": "gzip, deflate",
        "Origin": "https://www.chess.com",
        "DNT": "1",
        "Connection": "keep-alive",
        "Referer": "https://www.chess.com/",
        "Sec-Fetch-Dest": "empty",
        "Sec-Fetch-Mode": "cors",
        "Sec-Fetch-Site": "cross-site",
        "Content-Length": "0",
    }


class ChessBombClient:
    """Client for the chessbomb events API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        user_agent: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Args:
            base_url: Upstream origin (default: CHESSBOMB_BASE_URL or nxt.chessbomb.com)
            user_agent: User-Agent header (default: RELAY_USER_AGENT or Firefox)
            timeout: Per-request timeout in seconds (default: RELAY_HTTP_TIMEOUT or none)
            session: Pre-built session, mainly for tests
        """
        self.base_url = (base_url or get_base_url()).rstrip("/")
        self.timeout = timeout if timeout is not None else get_http_timeout()
        self.session = session or requests.Session()
        self.session.headers.update(build_browser_headers(user_agent or get_user_agent()))

    def _post_json(self, endpoint: str, *segments: str) -> Dict[str, Any]:
        """POST to /events/api/<endpoint>/<segments…> and decode the JSON body."""
        url = "/".join([self.base_url, "events", "api", endpoint, *segments])
        LOGGER.debug("POST %s", url)

        with metrics.request_timer(endpoint):
            try:
                resp = self.session.post(url, timeout=self.timeout)
            except requests.exceptions.RequestException:
                metrics.record_request(endpoint, "error")
                raise

        metrics.record_request(endpoint, str(resp.status_code))
        resp.raise_for_status()
        return resp.json()

    def fetch_event(self, event_id: str) -> EventMetadata:
        """Fetch rounds and games of one event."""
        event = EventMetadata.from_json(self._post_json(ROOM_ENDPOINT, event_id))
        LOGGER.info(
            "Event '%s' (%s): %d round(s), %d game(s)",
            event.name,
            event_id,
            len(event.rounds),
            len(event.games),
        )
        return event

    def fetch_game(self, event_id: str, round_slug: str, game_slug: str) -> GameDetail:
        """Fetch the move list of one game."""
        detail = GameDetail.from_json(
            self._post_json(GAME_ENDPOINT, event_id, round_slug, game_slug)
        )
        LOGGER.debug("Game %s: %d move(s)", game_slug, len(detail.moves))
        return detail
