"""Logging helpers shared by the engine, the HTTP client and the CLI."""

from __future__ import annotations

import logging
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
LOG_DATEFMT = "%H:%M:%S"
ROOT_NAME = "arrowword"

# requests logs every connection at DEBUG through urllib3.
NOISY_LOGGERS = ("urllib3",)


def parse_level(name: Union[str, int, None]) -> int:
    """Map a ``--log-level`` value such as ``"debug"`` or ``"10"`` to a level.

    Unknown names fall back to ``INFO`` rather than failing the command.
    """

    if isinstance(name, int):
        return name
    text = (name or "").strip().upper()
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level: Union[str, int] = logging.INFO) -> None:
    """Install a single stderr handler on the root logger.

    Play sessions log state transitions at DEBUG and lifecycle events at
    INFO. Embedders that install their own handlers first keep them.
    """

    level = parse_level(level)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)
    for noisy in NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(max(level, logging.WARNING))


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under the ``arrowword`` namespace."""

    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name or ROOT_NAME)
