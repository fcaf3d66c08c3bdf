# ==============================================================================
# errors.py  –  Exceptions raised by pgnrelay itself
#
# Transport and JSON failures are left as `requests` exceptions and illegal
# moves as python-chess exceptions; only the adapter's own conditions live here.
# ==============================================================================

from __future__ import annotations


class RelayError(Exception):
    """Base class for pgnrelay errors."""


class RoundNotFoundError(RelayError, LookupError):
    """The requested round slug is not listed in the event metadata."""

    def __init__(self, round_slug: str, event_id: str) -> None:
        super().__init__(f"Round {round_slug} not found in event {event_id}")
        self.round_slug = round_slug
        self.event_id = event_id


class MoveDecodeError(RelayError, ValueError):
    """A `cbn` move field is not of the form `<lan>_<san>`."""

    def __init__(self, cbn: str) -> None:
        super().__init__(f"Cannot decode move encoding {cbn!r}")
        self.cbn = cbn


class SourceUrlError(RelayError, ValueError):
    """A source string is not of the form `chessdotcom:<event_id>/<round_slug>`."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Invalid source url {url!r}: {reason}")
        self.url = url
