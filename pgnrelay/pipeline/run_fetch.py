#!/usr/bin/env python3
# ==============================================================================
# run_fetch.py  –  Script entry point for a broadcast fetch
#   Calls: pgnrelay.main.main (.env is loaded by pgnrelay.utils.config_utils)
# ==============================================================================

import sys
from pathlib import Path

CURRENT_FILE = Path(__file__).resolve()
PROJECT_ROOT = CURRENT_FILE.parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pgnrelay.main import main


if __name__ == "__main__":
    sys.exit(main())
