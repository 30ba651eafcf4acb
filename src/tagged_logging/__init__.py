"""tagged-logging - prefix log lines with per-context tag stacks."""

from loguru import logger

from .filters import TagFilter, tag_patcher
from .log import configure_logging, disable_logging
from .registry import TagRegistry, current_context
from .sinks import (
    CRITICAL,
    DEBUG,
    ERROR,
    INFO,
    UNKNOWN,
    WARNING,
    LoguruSink,
    Sink,
    StdlibSink,
    StreamSink,
)
from .tag_stack import TagStack, normalize_tags
from .tagged_logger import TaggedLogger, wrap

__version__ = "0.1.0"

# Silent unless the application opts in via configure_logging()
logger.disable(__name__)

__all__ = [
    "wrap",
    "TaggedLogger",
    "TagStack",
    "normalize_tags",
    "TagRegistry",
    "current_context",
    "Sink",
    "StreamSink",
    "StdlibSink",
    "LoguruSink",
    "TagFilter",
    "tag_patcher",
    "configure_logging",
    "disable_logging",
    "DEBUG",
    "INFO",
    "WARNING",
    "ERROR",
    "CRITICAL",
    "UNKNOWN",
]
