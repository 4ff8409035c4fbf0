"""Loguru setup for the fact ledger.

Every component logs through a logger bound to its own component name.
Interactive terminals get colorized console lines, everything else gets one
JSON object per record on stdout. SQLAlchemy's standard-library loggers
(used for SQL echo) are routed into the same sinks.
"""

import logging
import sys
from typing import Optional

from loguru import logger

from ledger_system.config.settings import settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[component]}</cyan> | "
    "<level>{message}</level>"
)


class _SQLAlchemyHandler(logging.Handler):
    """Forward stdlib records from sqlalchemy.* into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.bind(component=record.name).opt(exception=record.exc_info).log(
            level, record.getMessage()
        )


def configure_logging(level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """
    (Re)configure the loguru sinks.

    Args:
        level: Minimum level, defaults to settings.log_level
        log_format: "console" or "json", defaults to settings.log_format.
            Console output is only used when stderr is a TTY.
    """
    level = (level or settings.log_level).upper()
    log_format = (log_format or settings.log_format).lower()

    logger.remove()
    logger.configure(extra={"component": "ledger"})

    if log_format == "console" and sys.stderr.isatty():
        logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)
    else:
        logger.add(
            sys.stdout,
            format="{message}",
            level=level,
            serialize=True,
            diagnose=False,
        )

    sa_logger = logging.getLogger("sqlalchemy")
    sa_logger.handlers = [_SQLAlchemyHandler()]
    sa_logger.propagate = False


def get_logger(component: str):
    """
    Logger bound to a component name.

    Example:
        >>> log = get_logger("seed")
        >>> log.info("Seeded 11 facts")
    """
    return logger.bind(component=component)


configure_logging()

__all__ = ["logger", "get_logger", "configure_logging"]
