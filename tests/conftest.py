# ==============================================================================
# conftest.py  –  Shared fixtures: upstream JSON payloads + fake HTTP session
# ==============================================================================

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# ------------------------------------------------------------------------------
# Path setup (ensure project root on sys.path)
# ------------------------------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

BASE_URL = "https://nxt.chessbomb.com"


# ------------------------------------------------------------------------------
# Payload factories
# ------------------------------------------------------------------------------
@pytest.fixture
def make_game():
    """Build one `games[]` entry as the room endpoint returns it."""

    def _make(
        round_id=5,
        slug="g1",
        white="Alice",
        black="Bob",
        white_elo=2400,
        black_elo=2350,
        result="1-0",
        white_title=None,
        black_title=None,
    ):
        return {
            "roundId": round_id,
            "slug": slug,
            "whiteElo": white_elo,
            "blackElo": black_elo,
            "white": {"name": white, "title": white_title},
            "black": {"name": black, "title": black_title},
            "result": result,
        }

    return _make


@pytest.fixture
def make_event():
    """Build a room endpoint response."""

    def _make(rounds, games, name="Test Open", time_control="90+30"):
        return {
            "room": {"id": 77, "timeControl": time_control},
            "name": name,
            "rounds": rounds,
            "games": games,
        }

    return _make


@pytest.fixture
def make_detail():
    """Build a game endpoint response from a `games[]` entry and (cbn, clock) pairs."""

    def _make(game, moves, time_control="90+30"):
        return {
            "game": game,
            "room": {"id": 77, "timeControl": time_control},
            "moves": [
                {"ply": i, "cbn": cbn, "clock": clock}
                for i, (cbn, clock) in enumerate(moves, 1)
            ],
        }

    return _make


# ------------------------------------------------------------------------------
# Fake HTTP
# ------------------------------------------------------------------------------
def fake_response(payload, status_code=200):
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = payload
    resp.raise_for_status.return_value = None
    return resp


@pytest.fixture
def fake_session():
    """
    Return a factory for a MagicMock session whose `post` serves `routes`.

    `routes` maps an API path ("room/123", "game/123/round-1/g1") to a JSON
    payload. Unknown paths raise KeyError so a stray request fails the test.
    """

    def _make(routes):
        session = MagicMock()
        session.headers = {}
        prefix = f"{BASE_URL}/events/api/"

        def _post(url, timeout=None):
            return fake_response(routes[url[len(prefix):]])

        session.post.side_effect = _post
        return session

    return _make


# ------------------------------------------------------------------------------
# Metrics
# ------------------------------------------------------------------------------
@pytest.fixture
def metric_value():
    """Read a sample from the default Prometheus registry (0.0 if never set)."""
    from prometheus_client import REGISTRY

    from pgnrelay.utils.metrics import INSTANCE, JOB

    def _read(name, **labels):
        value = REGISTRY.get_sample_value(
            name, {**labels, "instance": INSTANCE, "job": JOB}
        )
        return value or 0.0

    return _read
