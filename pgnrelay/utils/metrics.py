# ==============================================================================
# metrics.py  –  Prometheus counters for upstream fetches and conversions
#
# Metrics live in the default registry; `start_metrics_server` exposes them.
# ==============================================================================

from __future__ import annotations

import os

from prometheus_client import Counter, Histogram, start_http_server

from pgnrelay.utils.logging_utils import setup_logger

LOGGER = setup_logger("metrics")

# Instance and job labels come from the environment
INSTANCE = os.getenv("INSTANCE_NAME", "pgnrelay:8000")
JOB = os.getenv("JOB_NAME", "pgnrelay")

UPSTREAM_REQUESTS = Counter(
    "pgnrelay_upstream_requests_total",
    "Total number of requests sent to the broadcast API",
    ["endpoint", "status", "instance", "job"],
)

UPSTREAM_LATENCY = Histogram(
    "pgnrelay_upstream_request_duration_seconds",
    "Duration of requests sent to the broadcast API",
    ["endpoint", "instance", "job"],
)

GAMES_CONVERTED = Counter(
    "pgnrelay_games_converted_total",
    "Total number of games converted to PGN",
    ["instance", "job"],
)

GAMES_FAILED = Counter(
    "pgnrelay_games_failed_total",
    "Total number of games whose conversion raised",
    ["instance", "job"],
)

CONVERSION_DURATION = Histogram(
    "pgnrelay_game_conversion_duration_seconds",
    "Duration of a single game fetch + conversion",
    ["instance", "job"],
)


def record_request(endpoint: str, status: str) -> None:
    """Count one upstream request; status is the HTTP code or 'error'."""
    UPSTREAM_REQUESTS.labels(
        endpoint=endpoint, status=status, instance=INSTANCE, job=JOB
    ).inc()


def request_timer(endpoint: str):
    """Context manager timing one upstream request."""
    return UPSTREAM_LATENCY.labels(endpoint=endpoint, instance=INSTANCE, job=JOB).time()


def conversion_timer():
    """Context manager timing one game conversion."""
    return CONVERSION_DURATION.labels(instance=INSTANCE, job=JOB).time()


def record_game(ok: bool) -> None:
    counter = GAMES_CONVERTED if ok else GAMES_FAILED
    counter.labels(instance=INSTANCE, job=JOB).inc()


def start_metrics_server(port: int) -> None:
    """Expose the default registry over HTTP on `port`."""
    LOGGER.info("Starting metrics server on port %d…", port)
    start_http_server(port)
    LOGGER.info("Metrics server started.")
