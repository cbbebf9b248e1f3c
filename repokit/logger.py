"""Loguru logging setup for repokit.

Library modules log through ``logging.getLogger(__name__)``. Applications
call :func:`setup_logging` once at startup to install a loguru sink and
route the standard library records into it through :class:`InterceptHandler`.
"""

import logging
import os
import sys
from inspect import currentframe

import typing as t
from loguru import logger

from .config import RepositorySettings


class InterceptHandler(logging.Handler):
    """Handler to intercept standard library logging and route to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        """Emit log record via Loguru."""
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = (currentframe(), 0)
        while frame and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level,
            record.getMessage(),
        )


def _is_testing_mode() -> bool:
    return "pytest" in sys.modules or os.getenv("TESTING", "False").lower() == "true"


def setup_logging(
    settings: RepositorySettings | None = None,
    sink: t.Any = None,
    force: bool = False,
) -> bool:
    """Configure loguru and intercept standard library logging.

    Args:
        settings: Settings providing level and format, defaults to env settings
        sink: Loguru sink, ``sys.stderr`` when omitted
        force: Configure even when running under pytest

    Returns:
        True if logging was configured, False if skipped for testing
    """
    if _is_testing_mode() and not force:
        return False

    settings = settings or RepositorySettings()
    logger.remove()
    logger.add(
        sink or sys.stderr,
        level=settings.log_level,
        format=settings.log_format,
        backtrace=False,
        diagnose=False,
    )
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    logger.debug(f"Logging configured at level {settings.log_level}")
    return True


__all__ = ["InterceptHandler", "logger", "setup_logging"]
