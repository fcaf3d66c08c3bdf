"""
Data models for the chessbomb broadcast API.

These types don't carry every upstream field, just the ones we convert.
Unknown keys are ignored; a missing required key raises KeyError.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Round:
    """A named stage of an event."""
    id: int
    slug: str

    @classmethod
    def from_json(cls, raw: Dict[str, Any]) -> "Round":
        return cls(id=raw["id"], slug=raw["slug"])


@dataclass(frozen=True)
class Room:
    """Broadcast room; carries the event's time control."""
    id: int
    time_control: str

    @classmethod
    def from_json(cls, raw: Dict[str, Any]) -> "Room":
        return cls(id=raw["id"], time_control=raw.get("timeControl") or "")


@dataclass(frozen=True)
class Player:
    name: str
    title: Optional[str] = None

    @classmethod
    def from_json(cls, raw: Dict[str, Any]) -> "Player":
        return cls(name=raw["name"], title=raw.get("title") or None)


@dataclass(frozen=True)
class GameSummary:
    """One game as listed in the event metadata."""
    round_id: int
    slug: str
    white: Player
    black: Player
    white_elo: Optional[int]
    black_elo: Optional[int]
    result: str  # "1-0", "0-1", "1/2-1/2", "*"

    @classmethod
    def from_json(cls, raw: Dict[str, Any]) -> "GameSummary":
        return cls(
            round_id=raw["roundId"],
            slug=raw["slug"],
            white=Player.from_json(raw["white"]),
            black=Player.from_json(raw["black"]),
            white_elo=raw.get("whiteElo"),
            black_elo=raw.get("blackElo"),
            result=raw.get("result") or "*",
        )


@dataclass(frozen=True)
class Move:
    """A single ply: `cbn` is "<lan>_<san>", `clock` is in milliseconds."""
    ply: int
    cbn: str
    clock: int

    @classmethod
    def from_json(cls, raw: Dict[str, Any]) -> "Move":
        return cls(ply=raw["ply"], cbn=raw["cbn"], clock=raw.get("clock") or 0)


@dataclass(frozen=True)
class EventMetadata:
    """Response of `POST /events/api/room/<event_id>`."""
    room: Room
    name: str
    rounds: Tuple[Round, ...]
    games: Tuple[GameSummary, ...]

    @classmethod
    def from_json(cls, raw: Dict[str, Any]) -> "EventMetadata":
        return cls(
            room=Room.from_json(raw["room"]),
            name=raw["name"],
            rounds=tuple(Round.from_json(r) for r in raw.get("rounds", [])),
            games=tuple(GameSummary.from_json(g) for g in raw.get("games", [])),
        )

    def games_in_round(self, round_id: int) -> List[GameSummary]:
        """Games belonging to `round_id`, in upstream order."""
        return [g for g in self.games if g.round_id == round_id]


@dataclass(frozen=True)
class GameDetail:
    """Response of `POST /events/api/game/<event_id>/<round_slug>/<game_slug>`."""
    game: GameSummary
    room: Room
    moves: Tuple[Move, ...]

    @classmethod
    def from_json(cls, raw: Dict[str, Any]) -> "GameDetail":
        return cls(
            game=GameSummary.from_json(raw["game"]),
            room=Room.from_json(raw["room"]),
            moves=tuple(Move.from_json(m) for m in raw.get("moves", [])),
        )
