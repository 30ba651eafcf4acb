"""Loguru configuration for tagged-logging's own diagnostics.

The package disables its loguru output on import; ``configure_logging``
turns it on for applications that want to see it.
"""

import sys
import logging

from loguru import logger

from .config import config

PACKAGE = "tagged_logging"
FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level:<7} | {name}:{function}:{line} | {message}"

_handler_id: int | None = None


# Intercept stdlib logging → loguru
class InterceptHandler(logging.Handler):
    def emit(self, record):
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1
        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def configure_logging(level: str | None = None, sink=sys.stderr, intercept_stdlib: bool = False) -> int:
    """Enable the package's loguru diagnostics and return the handler id.

    Calling it again replaces the previously installed handler.
    """
    global _handler_id
    level = (level or config.log_level).upper()
    if _handler_id is not None:
        logger.remove(_handler_id)
    _handler_id = logger.add(
        sink,
        format=FORMAT,
        level=int(level) if level.isdigit() else level,
        filter=PACKAGE,
        colorize=False,
    )
    logger.enable(PACKAGE)
    if intercept_stdlib:
        logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    return _handler_id


def disable_logging() -> None:
    """Remove the diagnostics handler and silence the package again."""
    global _handler_id
    if _handler_id is not None:
        logger.remove(_handler_id)
        _handler_id = None
    logger.disable(PACKAGE)
