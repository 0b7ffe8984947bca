#!/usr/bin/env python3
"""Run the milk round API from a source checkout.

Hosting platforms hand the listening port over in ``PORT``; ``HOST`` is
optional. The in-memory store is per process, so exactly one uvicorn worker
is started.
"""

import logging
import os
import sys
from pathlib import Path

import uvicorn

logger = logging.getLogger("milkround.start")

SRC_DIR = Path(__file__).resolve().parent / "src"
DEFAULT_PORT = 8000


def _port_from_env() -> int:
    raw = os.environ.get("PORT", str(DEFAULT_PORT))
    try:
        return int(raw)
    except ValueError:
        logger.warning("PORT=%r is not a number; listening on %d", raw, DEFAULT_PORT)
        return DEFAULT_PORT


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    if SRC_DIR.is_dir() and str(SRC_DIR) not in sys.path:
        sys.path.insert(0, str(SRC_DIR))

    try:
        from milkround.main import app
    except ImportError:
        logger.exception("milkround is neither installed nor importable from %s", SRC_DIR)
        return 1

    host = os.environ.get("HOST", "0.0.0.0")
    port = _port_from_env()
    logger.info("Serving milk round ledger on %s:%d", host, port)
    uvicorn.run(app, host=host, port=port, workers=1, proxy_headers=True, forwarded_allow_ips="*")
    return 0


if __name__ == "__main__":
    sys.exit(main())
