from __future__ import annotations

import logging
import os
from typing import Literal

import coloredlogs  # type: ignore[import]

LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]

SIMPLE_FORMAT = "%(asctime)s %(levelname)s %(message)s"
DETAILED_FORMAT = "%(asctime)s [%(name)s] %(filename)s:%(lineno)d - %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logging(level: LogLevel | None = None) -> None:
    """Install coloredlogs; DEBUG runs show where each probe message came from."""
    resolved = (level or os.environ.get("LOGLEVEL", "INFO")).upper()
    debug = resolved == "DEBUG"

    coloredlogs.install(
        level=resolved,
        fmt=DETAILED_FORMAT if debug else SIMPLE_FORMAT,
        datefmt=DATE_FORMAT,
    )

    # asyncio is chatty at DEBUG
    logging.getLogger("asyncio").setLevel(logging.DEBUG if debug else logging.WARNING)
