# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

from .config import CFG


def get_logger(name: str) -> logging.Logger:
    """
    Return a dirzip logger writing through rich to stderr.

    In debug mode (the dirzip debug environment variable is set) debug messages
    are shown and every record carries a timestamp. Calling this repeatedly
    for the same name does not attach additional handlers.
    """
    logger = logging.getLogger(name)

    debug_mode = os.environ.get(CFG.env_vars.debug_mode) is not None
    level = logging.DEBUG if debug_mode else logging.INFO
    logger.setLevel(level)
    logger.propagate = False

    if logger.handlers:
        return logger

    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        show_path=False,
        show_time=debug_mode,
        log_time_format=CFG.date_formats.standard,
    )
    handler.setLevel(logging.DEBUG)
    logger.addHandler(handler)

    return logger
