# ==============================================================================
# config_utils.py  –  Tiny helper for environment-driven settings
#
# Centralizes:
#   • Upstream origin and browser User-Agent
#   • HTTP timeout
#   • Per-game failure policy
#   • Log directory and metrics port
#   • `.env` discovery (working directory first, then the source checkout)
# ==============================================================================

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

PACKAGE_DIR = Path(__file__).resolve().parents[1]


def find_checkout_root(package_dir: Path = PACKAGE_DIR) -> Optional[Path]:
    """
    Return the source checkout holding `package_dir`, or None.

    A checkout has `pyproject.toml` next to the package; an installed copy
    sits directly in site-packages without one.
    """
    root = package_dir.parent
    return root if (root / "pyproject.toml").is_file() else None


def find_env_file(checkout_root: Optional[Path] = None) -> Optional[Path]:
    """
    Locate the `.env` file to load.

    • a `.env` in the working directory or one of its parents
    • otherwise `<checkout>/.env` when running from a source checkout
    """
    found = find_dotenv(usecwd=True)
    if found:
        return Path(found)
    if checkout_root and (checkout_root / ".env").is_file():
        return checkout_root / ".env"
    return None


CHECKOUT_ROOT = find_checkout_root()
ENV_FILE = find_env_file(CHECKOUT_ROOT)
if ENV_FILE:
    load_dotenv(dotenv_path=ENV_FILE, override=False)  # env values override file

DEFAULT_BASE_URL = "https://nxt.chessbomb.com"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64; rv:128.0) Gecko/20100101 Firefox/128.0"
)


# ------------------------------------------------------------------------------
# Internal helpers
# ------------------------------------------------------------------------------


def _bool_env(var_name: str, default: str = "false") -> bool:
    """Convert TRUE / true / 1 style env vars to bool."""
    return os.getenv(var_name, default).strip().lower() in {"1", "true", "yes"}


def _optional_env(var_name: str) -> Optional[str]:
    """Return a stripped env value, treating blank as unset."""
    value = os.getenv(var_name)
    if value is None or not value.strip():
        return None
    return value.strip()


# ------------------------------------------------------------------------------
# Public API
# ------------------------------------------------------------------------------


def get_base_url() -> str:
    """Return the chessbomb origin, without a trailing slash."""
    return (_optional_env("CHESSBOMB_BASE_URL") or DEFAULT_BASE_URL).rstrip("/")


def get_user_agent() -> str:
    """Return the User-Agent sent with every upstream request."""
    return _optional_env("RELAY_USER_AGENT") or DEFAULT_USER_AGENT


def get_http_timeout() -> Optional[float]:
    """
    Return the per-request timeout in seconds, or None for no timeout.

    Raises
    ------
    ValueError
        If ``RELAY_HTTP_TIMEOUT`` is set but not a positive number.
    """
    raw = _optional_env("RELAY_HTTP_TIMEOUT")
    if raw is None:
        return None
    try:
        timeout = float(raw)
    except ValueError as exc:
        raise ValueError(f"RELAY_HTTP_TIMEOUT must be a number, got {raw!r}") from exc
    if timeout <= 0:
        raise ValueError(f"RELAY_HTTP_TIMEOUT must be positive, got {raw!r}")
    return timeout


def get_skip_failed_games() -> bool:
    """Whether a failing game is skipped instead of aborting the whole round."""
    return _bool_env("RELAY_SKIP_FAILED_GAMES")


def get_log_dir() -> Optional[Path]:
    """
    Return the directory for log files, or None for console-only logging.

    RELAY_LOG_DIR wins; a source checkout falls back to `<checkout>/logs`.
    An installed copy writes no log files unless RELAY_LOG_DIR is set.
    """
    raw = _optional_env("RELAY_LOG_DIR")
    if raw:
        return Path(raw)
    return CHECKOUT_ROOT / "logs" if CHECKOUT_ROOT else None


def get_metrics_port() -> Optional[int]:
    """Return the Prometheus exporter port, or None when metrics are not served."""
    raw = _optional_env("RELAY_METRICS_PORT")
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"RELAY_METRICS_PORT must be an integer, got {raw!r}") from exc
