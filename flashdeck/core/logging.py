import sys

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


def configure_logging(level: str = "INFO", sink=None) -> None:
    """Replace loguru's default sink with a single sink (stderr unless given) at ``level``."""
    logger.remove()
    logger.add(sink or sys.stderr, level=level.upper(), format=LOG_FORMAT, backtrace=False, diagnose=False)
