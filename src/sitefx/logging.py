"""Central logging configuration using loguru."""

from __future__ import annotations

import sys
from pathlib import Path
from loguru import logger

from sitefx.config import SiteFxSettings

_LOG_FILE: Path | None = None

_CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[context]}</cyan> | {message}"
)
_FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[context]} | {message}"


def configure_logging(settings: SiteFxSettings, level: str | None = None) -> Path:
    """Route logs to stderr and a rotating ``<app_name>.log`` once per process.

    ``level`` only affects the console; the file always records DEBUG so
    effect timelines (latch edges, batch expiry, wipe commits) can be replayed.
    Returns the log file path.
    """

    global _LOG_FILE
    if _LOG_FILE is not None:
        return _LOG_FILE

    log_dir: Path = settings.paths.logs_dir
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"{settings.app_name}.log"

    logger.remove()
    logger.configure(extra={"context": settings.app_name})
    # sys.stderr is looked up per message; CLI runners swap it out.
    logger.add(
        sink=lambda msg: sys.stderr.write(msg),
        level=(level or settings.log_level).upper(),
        colorize=True,
        format=_CONSOLE_FORMAT,
    )
    logger.add(
        log_file,
        level="DEBUG",
        format=_FILE_FORMAT,
        rotation="1 week",
        retention=4,
        compression="zip",
        backtrace=True,
        diagnose=False,
    )

    _LOG_FILE = log_file
    logger.bind(context=settings.app_name).debug("Logging to {}", log_file)
    return log_file


def get_logger(name: str | None = None):
    return logger.bind(context=name or "sitefx")
