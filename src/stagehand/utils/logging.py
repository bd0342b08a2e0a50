import logging
import sys
from typing import Optional, TextIO

PACKAGE_LOGGER = "stagehand"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s: %(message)s"


class _StagehandHandler(logging.StreamHandler):
    """Marker type so repeated setup replaces only handlers installed here."""


def configure_logging(level: int = logging.INFO, stream: Optional[TextIO] = None) -> logging.Logger:
    """Send stagehand's log records to `stream` (stdout by default) at `level`.

    Only the package logger is touched; handlers the host application put on
    the root logger stay in place. Calling this again swaps the handler
    instead of stacking a second one.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        if isinstance(handler, _StagehandHandler):
            logger.removeHandler(handler)

    handler = _StagehandHandler(stream=stream or sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S"))
    logger.addHandler(handler)
    return logger
