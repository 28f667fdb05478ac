# snsfeed/core/logger.py
import sys

from loguru import logger

from .config import settings

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


def configure_logging() -> None:
    """Replaces loguru's default sink with one honouring LOG_LEVEL."""
    logger.remove()
    logger.add(sys.stderr, level=settings.LOG_LEVEL.upper(), format=LOG_FORMAT)
