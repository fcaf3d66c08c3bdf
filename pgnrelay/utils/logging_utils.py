# ==============================================================================
# logging_utils.py  –  Per-module loggers for pgnrelay
#
#   • Console output on stderr; stdout carries the PGN
#   • One timestamped log file per logger when a log directory is known
#     (RELAY_LOG_DIR, or <checkout>/logs from a source checkout)
#   • Installed copies without RELAY_LOG_DIR log to the console only
#   • Calling setup_logger twice replaces the handlers, never stacks them
# ==============================================================================

from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from pgnrelay.utils import config_utils

_FMT = "%(asctime)s | %(levelname)-8s | %(message)s"
_DEFAULT_LEVEL = logging.INFO


def _file_handler(
    logs_dir: Path, logger_name: str, fmt: logging.Formatter
) -> Optional[logging.Handler]:
    """`<logs_dir>/<name>_<timestamp>.log`, or None if the directory is unusable."""
    try:
        logs_dir.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        handler = logging.FileHandler(
            logs_dir / f"{logger_name}_{stamp}.log", encoding="utf-8"
        )
    except OSError:
        logging.getLogger().warning("Cannot write logs to %s", logs_dir)
        return None
    handler.setFormatter(fmt)
    return handler


def setup_logger(
    name: str,
    level: int = _DEFAULT_LEVEL,
    logs_dir: Union[str, Path, None] = None,
) -> logging.Logger:
    """
    Configure and return the logger called `name`.

    Parameters
    ----------
    name : str
        Logger name, also the log file prefix.
    level : int
        Logging level (INFO by default).
    logs_dir : str | Path | None
        Directory for the log file (default: ``config_utils.get_log_dir()``;
        None there means console only).
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.handlers.clear()

    formatter = logging.Formatter(_FMT)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    logger.addHandler(console)

    target_dir = Path(logs_dir) if logs_dir else config_utils.get_log_dir()
    if target_dir is not None:
        handler = _file_handler(target_dir, name, formatter)
        if handler:
            logger.addHandler(handler)

    return logger
