"""Logging configuration for the command-line entry point.

Library modules only create loggers; handlers are installed here, once.
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str = "WARNING") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, force=True)
    logging.getLogger("order_wizard").setLevel(level.upper())
