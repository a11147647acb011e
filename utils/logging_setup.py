# utils/logging_setup.py
import sys

from loguru import logger


def configure_logging(level: str = "INFO") -> None:
    """Single stderr sink at `level`; called once at startup."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
               "<cyan>{name}</cyan>:<cyan>{line}</cyan> - {message}",
    )
