"""
Logging configuration for the command line tool.
"""
import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def resolve_log_level(level_name: str) -> int:
    """
    Converts a level name such as 'info' to its numeric value.

    :raises ValueError: For an unknown level name.
    """
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {level_name}")
    return level


def configure_logging(level_name: str = "WARNING", verbose: bool = False) -> None:
    """
    Sends the package's log records to stderr.

    :param level_name: Level to use when not verbose.
    :param verbose: Log everything down to DEBUG.
    """
    level = logging.DEBUG if verbose else resolve_log_level(level_name)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger = logging.getLogger("dockremote")
    logger.handlers = [handler]
    logger.setLevel(level)
