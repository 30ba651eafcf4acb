"""Logging sinks that TaggedLogger can wrap.

A sink is anything with ``log(level, message, source=None)`` where
``message`` is a string or a zero-argument callable producing one.
``flush()`` is optional. Levels are the stdlib ``logging`` numbers.
"""

import logging
import sys
from typing import Any, Callable, Protocol, TextIO, runtime_checkable

from .config import config

DEBUG = logging.DEBUG
INFO = logging.INFO
WARNING = logging.WARNING
ERROR = logging.ERROR
CRITICAL = logging.CRITICAL
# Above CRITICAL: messages of unknown severity are always emitted
UNKNOWN = CRITICAL + 10

logging.addLevelName(UNKNOWN, "UNKNOWN")

Message = str | Callable[[], Any] | None

_PACKAGE = __name__.split(".")[0]


@runtime_checkable
class Sink(Protocol):
    def log(self, level: int, message: Message, source: str | None = None) -> None: ...


def coerce_level(level: int | str) -> int:
    """Turn a level name ("info", "WARN") or number into a level number."""
    if isinstance(level, int):
        return level
    name = str(level).strip().upper()
    if name.isdigit():
        return int(name)
    levels = logging.getLevelNamesMapping()
    if name not in levels:
        raise ValueError(f"Unknown log level: {level!r}")
    return levels[name]


def render(message: Message, source: str | None = None) -> str:
    """Resolve a message or producer to text; falls back to the source label."""
    if callable(message):
        message = message()
    if message is None:
        message = source
    return "" if message is None else str(message)


def _in_package(module: str) -> bool:
    return module == _PACKAGE or module.startswith(_PACKAGE + ".")


def _caller_depth() -> int:
    """Frames from the calling sink method up to the first caller outside this package."""
    frame, depth = sys._getframe(2), 1
    while frame.f_back is not None and _in_package(frame.f_globals.get("__name__", "")):
        frame = frame.f_back
        depth += 1
    return depth


class StreamSink:
    """Plain ``message\\n`` writer over a text stream with a level threshold."""

    def __init__(self, stream: TextIO | None = None, level: int | str | None = None):
        self.stream = stream if stream is not None else sys.stderr
        self._level = coerce_level(level if level is not None else config.sink_level)

    @property
    def level(self) -> int:
        return self._level

    @level.setter
    def level(self, value: int | str) -> None:
        self._level = coerce_level(value)

    def set_level(self, value: int | str) -> None:
        self.level = value

    def is_enabled_for(self, level: int) -> bool:
        return level >= self._level

    def is_debug(self) -> bool:
        return self.is_enabled_for(DEBUG)

    def is_info(self) -> bool:
        return self.is_enabled_for(INFO)

    def is_warning(self) -> bool:
        return self.is_enabled_for(WARNING)

    def is_error(self) -> bool:
        return self.is_enabled_for(ERROR)

    def is_critical(self) -> bool:
        return self.is_enabled_for(CRITICAL)

    def log(self, level: int, message: Message = None, source: str | None = None) -> None:
        if not self.is_enabled_for(level):
            return
        self.stream.write(render(message, source) + "\n")

    def debug(self, message: Message = None, source: str | None = None) -> None:
        self.log(DEBUG, message, source)

    def info(self, message: Message = None, source: str | None = None) -> None:
        self.log(INFO, message, source)

    def warning(self, message: Message = None, source: str | None = None) -> None:
        self.log(WARNING, message, source)

    def error(self, message: Message = None, source: str | None = None) -> None:
        self.log(ERROR, message, source)

    def critical(self, message: Message = None, source: str | None = None) -> None:
        self.log(CRITICAL, message, source)

    def flush(self) -> None:
        self.stream.flush()


class StdlibSink:
    """Adapts a ``logging.Logger`` or ``LoggerAdapter``; the source label travels as ``extra``."""

    def __init__(self, logger: logging.Logger | logging.LoggerAdapter):
        self.logger = logger

    def log(self, level: int, message: Message = None, source: str | None = None) -> None:
        if not self.logger.isEnabledFor(level):
            return
        extra = {"source": source} if source is not None else None
        self.logger.log(level, render(message, source), extra=extra, stacklevel=_caller_depth() + 1)

    def flush(self) -> None:
        """Flush every handler the logger's records would reach."""
        current = self.logger
        while isinstance(current, logging.LoggerAdapter):
            current = current.logger
        while current is not None:
            for handler in current.handlers:
                handler.flush()
            if not current.propagate:
                break
            current = current.parent

    def __getattr__(self, name: str) -> Any:
        return getattr(self.logger, name)


# stdlib level number -> loguru level name
_LOGURU_LEVELS = {
    5: "TRACE",
    DEBUG: "DEBUG",
    INFO: "INFO",
    25: "SUCCESS",
    WARNING: "WARNING",
    ERROR: "ERROR",
    CRITICAL: "CRITICAL",
}


class LoguruSink:
    """Adapts a loguru logger; producers are passed through ``opt(lazy=True)``.

    Records are attributed to the first caller outside this package, so
    they carry the caller's location and are not silenced along with the
    package's own diagnostics.
    """

    def __init__(self, logger=None):
        if logger is None:
            from loguru import logger
        self.logger = logger

    def log(self, level: int, message: Message = None, source: str | None = None) -> None:
        depth = _caller_depth()
        target = self.logger.bind(source=source) if source is not None else self.logger
        level_id = _LOGURU_LEVELS.get(level, level)
        if callable(message):
            target.opt(depth=depth, lazy=True).log(level_id, "{}", message)
        else:
            # No args given, so loguru leaves braces in the text alone
            target.opt(depth=depth).log(level_id, render(message, source))

    def flush(self) -> None:
        self.logger.complete()

    def __getattr__(self, name: str) -> Any:
        return getattr(self.logger, name)


def is_loguru_logger(obj: Any) -> bool:
    return type(obj).__module__.startswith("loguru")


def adapt(sink: Any) -> Any:
    """Wrap native loggers in the matching adapter; pass sinks through."""
    if isinstance(sink, (logging.Logger, logging.LoggerAdapter)):
        return StdlibSink(sink)
    if is_loguru_logger(sink):
        return LoguruSink(sink)
    if not isinstance(sink, Sink):
        raise TypeError(f"{type(sink).__name__} has no log(level, message, source) method")
    return sink
