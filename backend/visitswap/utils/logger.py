"""Logging configuration for the application."""
import logging
import sys
from visitswap.config import settings

LOG_LEVEL = logging.DEBUG if settings.environment == "development" else logging.INFO

logger = logging.getLogger("visitswap")
logger.setLevel(LOG_LEVEL)

handler = logging.StreamHandler(sys.stdout)
handler.setLevel(LOG_LEVEL)
handler.setFormatter(
    logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
)

if not logger.handlers:
    logger.addHandler(handler)

# Uvicorn installs its own root handlers
logger.propagate = False

__all__ = ["logger"]
