#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wxmark/logging_utils.py
"""Logging setup for the wxmark command-line interface.

Library modules only create module-level loggers
(``logging.getLogger(__name__)``) and never configure handlers. The CLI
calls :func:`configure_logging` once, after parsing its arguments.
"""

from __future__ import annotations

import logging
import sys
from typing import List, Optional

LOG_FORMAT = "%(levelname)s: %(message)s"
TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_log_level(log_level: int | str, trace_mode: bool = False) -> int:
    """Turn a level name or number into a numeric level.

    Trace mode always means DEBUG. Unknown names fall back to INFO.
    """
    if trace_mode:
        return logging.DEBUG
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName(str(log_level).upper())
    return level if isinstance(level, int) else logging.INFO


def _build_handlers(level: int, log_file: Optional[str], formatter: logging.Formatter) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    return handlers


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Install stderr (and optionally file) handlers on the root logger.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or level name (e.g. ``"INFO"``)
    log_file : str, optional
        Also append log records to this file
    trace_mode : bool, default False
        Log at DEBUG with timestamps and logger names

    Returns
    -------
    logging.Logger
        The configured root logger

    """
    level = resolve_log_level(log_level, trace_mode)
    formatter = (
        logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT) if trace_mode else logging.Formatter(LOG_FORMAT)
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    try:
        handlers = _build_handlers(level, log_file, formatter)
    except OSError as exc:
        handlers = _build_handlers(level, None, formatter)
        for handler in handlers:
            root_logger.addHandler(handler)
        root_logger.warning("Could not open log file %s: %s", log_file, exc)
        return root_logger

    for handler in handlers:
        root_logger.addHandler(handler)
    if log_file:
        root_logger.info("Logging to file: %s", log_file)
    return root_logger


__all__ = ["LOG_FORMAT", "TRACE_FORMAT", "configure_logging", "resolve_log_level"]
