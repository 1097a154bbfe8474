import sys

from loguru import logger

from netaware.core.constants import LOG_FILE, LOG_LEVEL

# Configure logger
logger.remove()  # Remove default handler

# Add stderr handler only if available (not in windowed app)
if sys.stderr:
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=LOG_LEVEL,
    )

# Add file handler
logger.add(
    LOG_FILE,
    rotation="1 MB",
    retention="10 days",
    format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
    level="DEBUG",
    delay=True,
)


def configure_cli_logging(level: str = "INFO"):
    """Keep stderr quiet for interactive commands, full detail goes to the log file."""
    logger.remove()
    logger.add(sys.stderr, level=level)
    logger.add(LOG_FILE, level="DEBUG", rotation="1 MB", delay=True)
