import sys

from loguru import logger


def configure_logging(level: str = "INFO") -> None:
    """Replace the default loguru sink with plain messages on stdout, as the runner log expects."""
    logger.remove()
    logger.add(sys.stdout, level=level.upper(), format="{message}", colorize=False)
