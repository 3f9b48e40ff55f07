"""Logging configuration for the document translation service.

Every record carries a ``request_id`` extra so the lines emitted by one
translate-and-render call can be followed across the pipeline stages.
"""

import sys
from pathlib import Path
from loguru import logger
from core.config import settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<magenta>{extra[request_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[request_id]} | {name}:{function}:{line} - {message}"


def setup_logging(level: str = None, log_file: str = None):
    """Configure loguru sinks.
    
    Args:
        level: Minimum level (default from settings.LOG_LEVEL)
        log_file: Rotating log file path (default from settings.LOG_FILE)
    
    Returns:
        The configured loguru logger
    """
    level = level or settings.LOG_LEVEL
    log_path = Path(log_file or settings.LOG_FILE)
    
    logger.remove()
    logger.configure(extra={"request_id": "-"})
    
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)
    
    log_path.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_path,
        format=FILE_FORMAT,
        level=level,
        rotation=settings.LOG_ROTATION,
        retention=settings.LOG_RETENTION,
        compression="zip",
        enqueue=True,
    )
    
    return logger


def request_logger(request_id: str):
    """Return a logger bound to one request."""
    return log.bind(request_id=request_id)


# Initialize logger
log = setup_logging()
