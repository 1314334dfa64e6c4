from __future__ import annotations

import logging
import sys
from typing import TextIO

from pythonjsonlogger import jsonlogger


def configure_logging(level: str, stream: TextIO | None = None) -> None:
    """Send every record to one JSON handler on the root logger.

    Defaults to stderr so stdout stays free for command output.
    """
    logger = logging.getLogger()
    logger.setLevel(level.upper())

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(
        jsonlogger.JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s",
            rename_fields={"levelname": "level", "name": "logger"},
        )
    )

    logger.handlers = [handler]
