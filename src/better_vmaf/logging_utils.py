from __future__ import annotations

import logging
import sys

LOGGER_NAME = "better_vmaf"
_FORMAT = "[%(asctime)s] %(levelname)-7s %(name)s - %(message)s"


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Attach one stderr handler to the ``better_vmaf`` logger.

    Calling it again only changes the level, so repeated CLI runs in one
    process do not duplicate output.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)

    for handler in logger.handlers:
        handler.setLevel(level)
    return logger
