"""Logging setup shared by every sqlparam module"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from constants import DEFAULT_LOG_LEVEL

ROOT_LOGGER_NAME = 'sqlparam'


def setup_logger(name: str = ROOT_LOGGER_NAME, level: str = DEFAULT_LOG_LEVEL,
                 log_file: Optional[str] = None) -> logging.Logger:
    """Configure the application logger with a rich handler on stderr"""
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, str(level).upper(), logging.WARNING))

    # Drop handlers from a previous call so repeated setup doesn't duplicate output
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a child logger under the application namespace"""
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + '.'):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
