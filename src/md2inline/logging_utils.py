#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Centralized logging utilities for the md2inline command line."""

from __future__ import annotations

import logging
import sys
from typing import Optional

# Third-party loggers that report every preview request at INFO
_NOISY_LOGGERS = ("httpx", "httpcore")


def resolve_log_level(log_level: int | str) -> int:
    """Translate a level name such as ``"debug"`` into its numeric value.

    Unknown names resolve to ``logging.INFO``.
    """
    if isinstance(log_level, int):
        return log_level
    resolved = logging.getLevelName(str(log_level).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Configure root logging handlers for the CLI.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "INFO").
    log_file : str, optional
        Optional path to a log file for teeing log output.
    trace_mode : bool, default False
        When true, emit timestamps and logger names, and let the HTTP client
        loggers through at the requested level.

    Returns
    -------
    logging.Logger
        The configured root logger instance.

    """
    resolved_level = resolve_log_level(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved_level)
    root_logger.handlers.clear()

    format_str = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s" if trace_mode else "%(levelname)s: %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S" if trace_mode else None
    formatter = logging.Formatter(format_str, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(resolved_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            root_logger.warning(f"Could not create log file {log_file}: {exc}")
        else:
            file_handler.setLevel(resolved_level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
            root_logger.info(f"Logging to file: {log_file}")

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(resolved_level if trace_mode else max(resolved_level, logging.WARNING))

    return root_logger
