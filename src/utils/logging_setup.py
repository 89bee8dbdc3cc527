from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Verbose output belongs to the application, not to the command-line plumbing around it.
APP_LOGGER = "src.trader"


def configure_logging(*, verbose: bool = False, level: str = "INFO") -> int:
    """
    Configure process logging to stderr (idempotent; safe if configured elsewhere).

    The root logger runs at the configured level. Verbose only lowers the application
    logger to DEBUG, so the bootstrap, config loader and asyncio stay quiet.
    Returns the root level.
    """
    effective = logging.getLevelName(str(level).upper())
    if not isinstance(effective, int):
        effective = logging.INFO

    logging.basicConfig(level=effective, format=LOG_FORMAT, stream=sys.stderr)
    # basicConfig is a no-op once handlers exist; keep the requested level anyway.
    logging.getLogger().setLevel(effective)
    logging.getLogger(APP_LOGGER).setLevel(logging.DEBUG if verbose else logging.NOTSET)
    return effective
