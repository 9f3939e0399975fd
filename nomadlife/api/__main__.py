"""
nomadlife.api.__main__ — Entry point for ``python -m nomadlife.api``
======================================================================

Wiring:
1. Configure logging.
2. Load .env (secrets) — done on import of :mod:`nomadlife.api.main`.
3. Serve the app with Uvicorn.
"""

from __future__ import annotations

import logging
import os

import uvicorn

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("nomadlife")


def main() -> None:
    """Serve the NomadLife API."""
    from nomadlife.api.main import app

    port = int(os.getenv("PORT", "8000"))
    logger.info("Starting NomadLife API on port %d…", port)
    uvicorn.run(app, host="0.0.0.0", port=port, log_config=None)


if __name__ == "__main__":
    main()
