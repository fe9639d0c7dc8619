# app/core/logger.py
from loguru import logger

# Sinks are configured once by app.core.logging_config.setup_logging()
logger = logger.bind(service="trip-quote")

__all__ = ["logger"]
