"""
Logging setup for the portal.

All modules log through children of the "placement_portal" logger:
    logger = logging.getLogger(__name__)
"""

import logging
import sys

LOGGER_NAME = "placement_portal"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure console logging. Returns the root project logger."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())

    # Avoid duplicate handlers when create_app() runs more than once
    if not any(getattr(h, "_portal_handler", False) for h in logger.handlers):
        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        console._portal_handler = True
        logger.addHandler(console)

    return logger
