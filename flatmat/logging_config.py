# flatmat/logging_config.py
"""
Logging setup for applications built on flatmat.

Library modules only log (logging.getLogger(__name__)): DEBUG records for
matrix construction and for each ingestion step (file opened, column-major
reorder, dimensions inferred). Nothing is printed until an application calls
setup_logging(), which attaches handlers to the 'flatmat' namespace only.

    setup_logging("DEBUG")   # follow read_matrix step by step
    setup_logging()          # level from CONFIG.log_level

Handlers installed here are tagged, so calling setup_logging() again swaps
them without touching handlers the application added itself.
"""
import logging
import sys
from typing import Optional, Union

from .config import CONFIG

_TAG = "_flatmat_handler"

_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def _resolve_level(level: Union[int, str, None]) -> int:
    if level is None:
        level = CONFIG.log_level
    if isinstance(level, str):
        resolved = logging.getLevelName(level.strip().upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level {level!r}")
        return resolved
    return int(level)


def setup_logging(
    level: Union[int, str, None] = None, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Route flatmat's log records to stderr (and optionally a file).

    Args:
        level: Level name or number; None uses CONFIG.log_level.
        log_file: Optional path; records are appended there as well.

    Returns:
        The 'flatmat' package logger.

    Raises:
        ValueError: If level is an unknown name.
    """
    resolved = _resolve_level(level)
    logger = logging.getLogger("flatmat")
    logger.setLevel(resolved)
    # Records stop here so the root logger doesn't print them twice
    logger.propagate = False

    for handler in [h for h in logger.handlers if getattr(h, _TAG, False)]:
        logger.removeHandler(handler)
        handler.close()

    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))

    formatter = logging.Formatter(_FORMAT, datefmt="%H:%M:%S")
    for handler in handlers:
        setattr(handler, _TAG, True)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
