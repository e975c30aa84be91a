"""
Logging configuration for the review tracker.

Every record carries a ``cycle`` extra: the number of the poll cycle that
emitted it, or ``-`` outside of a cycle. The scheduler binds it with
``logger.contextualize`` so the lines of one report run can be told apart
in a long-running ``watch`` log.
"""

import sys
from typing import Optional

from loguru import logger

from ..config import Settings, get_settings

LOG_FILE = "logs/review_tracker.log"

FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "cycle {extra[cycle]} | "
    "<cyan>{module}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


def setup_logging(log_level: Optional[str] = None, settings: Optional[Settings] = None) -> None:
    """
    Set up logging configuration.

    Args:
        log_level: Override log level (DEBUG, INFO, WARNING, ERROR)
        settings: Settings to read defaults from (defaults to the cached settings)
    """
    settings = settings or get_settings()
    level = (log_level or settings.log_level).upper()
    as_json = settings.log_format == "json"

    handlers = [
        dict(
            sink=sys.stderr,
            format=FORMAT,
            level=level,
            colorize=not as_json,
            serialize=as_json,
            backtrace=settings.debug_mode,
            diagnose=settings.debug_mode,
        )
    ]

    # Unattended runs also keep a rotating log file
    if not settings.debug_mode:
        handlers.append(
            dict(
                sink=LOG_FILE,
                format=FORMAT,
                level=level,
                rotation="1 day",
                retention="30 days",
                compression="gz",
            )
        )

    logger.configure(handlers=handlers, extra={"cycle": "-"})
    logger.info(f"Logging initialized with level: {level}, format: {settings.log_format}")
