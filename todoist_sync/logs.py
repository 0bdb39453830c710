import sys

from loguru import logger

LOG_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{message}</cyan> {extra}"


def configure_logging(debug: bool = False, sink=sys.stderr) -> int:
    """Replace loguru's default handler with one at DEBUG or INFO level; returns the handler id."""
    logger.remove()
    return logger.add(sink, level="DEBUG" if debug else "INFO", format=LOG_FORMAT)
