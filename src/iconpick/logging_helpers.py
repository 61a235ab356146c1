"""loguru sink setup for the CLI and embedding hosts."""

from __future__ import annotations

import sys

from loguru import logger


def configure(debug: bool = False) -> None:
    """Replace loguru's default sink with a stderr sink at the right level.

    The sink looks ``sys.stderr`` up on every message so that redirected
    streams (e.g. under a test runner) are honored.
    """
    logger.remove()
    logger.add(
        lambda msg: sys.stderr.write(msg),
        level="DEBUG" if debug else "WARNING",
        format="{time:HH:mm:ss} {level} {name}: {message}",
    )
