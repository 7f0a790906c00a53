import sys

from loguru import logger

from wa_publisher.core.config import Settings, get_settings


def setup_logging(settings: Settings | None = None):
    settings = settings or get_settings()
    logger.remove()

    if settings.DEBUG:
        logger.add(
            sys.stderr,
            level="DEBUG",
            format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level> | {extra}",
        )
    else:
        logger.add(
            sys.stderr,
            level=settings.LOG_LEVEL.upper(),
            serialize=True,
            format="{time} {level} {message}",
        )

    return logger
