"""Logging configuration using loguru.

Everything ends up in loguru: our own ``logger`` calls plus stdlib records
from uvicorn, SQLAlchemy and Alembic.  A desktop install usually has no
visible console, so a rotating file sink under ``{data_root}/logs`` is added
when a directory is given.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

_NOISY_LOGGERS = ("uvicorn.access", "aiosqlite", "sqlalchemy.engine", "alembic.runtime.migration")


class _InterceptHandler(logging.Handler):
    """Forward stdlib records to loguru, keeping the original call-site."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame = logging.currentframe()
        depth = 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(level: str = "INFO", log_dir: str | Path | None = None) -> None:
    """Install loguru sinks and route stdlib logging through them.

    Call once at process startup.  ``log_dir`` enables ``gallery.log`` with
    10 MB rotation and one week of retention.
    """
    level = level.upper()

    logger.remove()
    logger.add(sys.stderr, level=level, format=LOG_FORMAT)
    if log_dir is not None:
        logger.add(
            Path(log_dir) / "gallery.log",
            level=level,
            format=LOG_FORMAT,
            rotation="10 MB",
            retention="7 days",
            enqueue=True,
        )

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger.info("Logging initialised (level={}, file={})", level, log_dir or "-")
