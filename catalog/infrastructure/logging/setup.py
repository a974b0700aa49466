"""
loguru sink configuration.
Called once by the composition root; every other module just does
``from loguru import logger``.
"""

import sys

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}:{function}:{line}</cyan> - <level>{message}</level>"
)


def configure_logging(level: str = "INFO", fmt: str = "console") -> None:
    """Replace loguru's default handler with a single stderr sink.

    Args:
        level: Minimum level name (e.g. 'DEBUG', 'INFO').
        fmt:   'json' for one serialized record per line, anything else for
               the colored console format.
    """
    logger.remove()
    if fmt == "json":
        logger.add(sys.stderr, level=level, serialize=True)
    else:
        logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT)
