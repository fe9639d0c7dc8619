# app/core/logging_config.py
from loguru import logger
import sys

from app.core.config import settings


def setup_logging(level: str | None = None) -> None:
    """
    Configure application-wide logging using loguru.
    """
    # Remove default handler added by loguru
    logger.remove()

    logger.add(
        sys.stdout,
        level=(level or settings.LOG_LEVEL).upper(),
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        enqueue=False,
        backtrace=True,
        diagnose=settings.ENVIRONMENT == "development",
    )
