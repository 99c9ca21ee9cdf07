"""
Logging setup for the Product API.

One line per request goes to the ``app.requests`` logger (method and path).
Request bodies and the x-api-key header are never logged.
"""

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
REQUEST_LOGGER = "app.requests"


def get_request_logger() -> logging.Logger:
    return logging.getLogger(REQUEST_LOGGER)


def configure_logging(level: str = "INFO", request_level: Optional[str] = None) -> None:
    """Configure logging for the application.

    Args:
        level: Root log level (DEBUG, INFO, WARNING, ERROR).
        request_level: Level for the per-request log lines; defaults to ``level``.
    """
    root_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=root_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )
    get_request_logger().setLevel(
        getattr(logging, request_level.upper(), root_level) if request_level else root_level
    )

    # uvicorn's access log would repeat the app.requests line
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
