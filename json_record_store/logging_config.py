from __future__ import annotations
import logging
import os
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOG_LEVEL_ENV = "JSON_RECORD_STORE_LOG_LEVEL"


def setup_logging(level: Optional[str] = None, console: Optional[Console] = None) -> logging.Logger:
    """
    Attach a RichHandler to the package logger.

    Level comes from the argument, then $JSON_RECORD_STORE_LOG_LEVEL, then INFO.
    Calling it again replaces the previously installed handler.
    """
    level = (level or os.environ.get(LOG_LEVEL_ENV) or "INFO").upper()
    logger = logging.getLogger("json_record_store")
    for h in list(logger.handlers):
        if isinstance(h, RichHandler):
            logger.removeHandler(h)
    handler = RichHandler(console=console or Console(stderr=True), show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
