"""
Loguru configuration shared by every pith component.

Records carry a ``component`` extra; bind one with get_logger("edges").
"""
from loguru import logger
from pathlib import Path
from typing import Optional
import sys

from ..config import settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[component]}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[component]} | {name}:{line} - {message}"


def setup_logging(log_level: str = "INFO", log_file: Optional[str] = "logs/pith.log"):
    """Send pith logging to stdout and, when given, a rotating file."""
    logger.remove()
    logger.configure(extra={"component": "pith"})

    logger.add(sys.stdout, format=CONSOLE_FORMAT, level=log_level.upper(), colorize=True)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            format=FILE_FORMAT,
            level=log_level.upper(),
            rotation="10 MB",
            retention="30 days",
            compression="zip",
        )

    return logger


def get_logger(component: str):
    """Logger tagged with a component name."""
    return logger.bind(component=component)


app_logger = setup_logging(settings.log_level, settings.log_file)
