"""
logging_config.py

Logging setup for the command-line entry points. Library code only creates
module loggers; handlers are installed here, on request.
"""
from __future__ import annotations

import logging
import os
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    if isinstance(level, str):
        level = level.upper()
    logger = logging.getLogger("holdem_equity")
    logger.setLevel(level)

    root = logging.getLogger()
    if root.handlers:
        # host process (e.g. a test runner) already owns the handlers
        return logger

    handlers = [logging.StreamHandler()]
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)
    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
