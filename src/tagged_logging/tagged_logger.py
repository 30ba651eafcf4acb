"""TaggedLogger - prefixes every log line with the current context's tags."""

import functools
import inspect
import logging
from typing import Any, Callable

from loguru import logger

from . import metrics
from .registry import TagRegistry
from .sinks import CRITICAL, DEBUG, ERROR, INFO, UNKNOWN, WARNING, Message, adapt
from .tag_stack import TagStack


class TaggedLogger:
    """Wraps a sink and prepends ``[tag] [tag] `` to everything logged.

    Tags are kept per execution context (thread or asyncio task), so
    concurrent callers sharing one TaggedLogger never see each other's
    tags. Attributes this class does not define are looked up on the sink.

    Usage:
        log = wrap(StreamSink())
        with log.tagged("req-42", ["billing"]):
            log.info("charged")  # -> "[req-42] [billing] charged"
    """

    def __init__(self, sink: Any):
        self._sink = adapt(sink)
        self._registry = TagRegistry()
        if self._sink is not sink:
            logger.debug("Adapted {} with {}", type(sink).__name__, type(self._sink).__name__)

    @property
    def sink(self) -> Any:
        """The wrapped sink."""
        return self._sink

    # -- tag stack ---------------------------------------------------------

    def _stack(self) -> TagStack:
        return self._registry.get()

    @property
    def current_tags(self) -> tuple[str, ...]:
        stack = self._registry.peek()
        return stack.tags if stack is not None else ()

    def push_tags(self, *tags: Any) -> list[str]:
        """Push tags onto the current context's stack; return those pushed."""
        pushed = self._stack().push(*tags)
        if pushed and metrics.enabled():
            metrics.TAGS_PUSHED.inc(len(pushed))
        return pushed

    def pop_tags(self, count: int = 1) -> list[str]:
        """Pop ``count`` tags; returned in the order they were printed."""
        stack = self._stack()
        if count > len(stack):
            logger.debug("Popping {} tags from a stack of {}", count, len(stack))
        popped = stack.pop(count)
        if popped and metrics.enabled():
            metrics.TAGS_POPPED.inc(len(popped))
        return popped

    def clear_tags(self) -> list[str]:
        stack = self._registry.peek()
        if stack is None:
            return []
        if stack and metrics.enabled():
            metrics.TAGS_POPPED.inc(len(stack))
        return stack.clear()

    def format_tags(self) -> str:
        stack = self._registry.peek()
        return stack.format() if stack is not None else ""

    def tagged(self, *tags: Any, body: Callable[["TaggedLogger"], Any] | None = None) -> "_TaggedScope":
        """Tag everything logged in a block.

        Works as a context manager or decorator, on plain and ``async``
        functions alike:

            with log.tagged("BCX", "Jason") as log:
                log.info("Funky time")

            @log.tagged("worker")
            async def run(): ...

        With ``body`` the callable is run at once inside the scope, with
        this logger as its only argument, and its result returned:

            log.tagged("BCX", body=lambda log: log.info("Funky time"))

        The tags pushed here are popped however the block exits.
        """
        scope = _TaggedScope(self, tags)
        if body is not None:
            with scope as log:
                return body(log)
        return scope

    # -- logging -----------------------------------------------------------

    def log(self, level: int, message: Message = None, source: str | None = None) -> None:
        """Forward to the sink with the current tags prefixed to ``message``.

        A callable message stays lazy: the sink receives a producer that
        prefixes the callable's result when (and if) the sink invokes it.
        The prefix itself is taken now, at call time.
        """
        if message is None and source is not None:
            message, source = source, None
        prefix = self.format_tags()
        if callable(message):
            producer = message
            message = lambda: f"{prefix}{producer()}"
        elif prefix:
            message = f"{prefix}{'' if message is None else message}"
        if metrics.enabled():
            metrics.LINES.labels(level=logging.getLevelName(level)).inc()
        self._sink.log(level, message, source)

    def debug(self, message: Message = None, source: str | None = None) -> None:
        self.log(DEBUG, message, source)

    def info(self, message: Message = None, source: str | None = None) -> None:
        self.log(INFO, message, source)

    def warning(self, message: Message = None, source: str | None = None) -> None:
        self.log(WARNING, message, source)

    warn = warning

    def error(self, message: Message = None, source: str | None = None) -> None:
        self.log(ERROR, message, source)

    def critical(self, message: Message = None, source: str | None = None) -> None:
        self.log(CRITICAL, message, source)

    fatal = critical

    def unknown(self, message: Message = None, source: str | None = None) -> None:
        self.log(UNKNOWN, message, source)

    def flush(self) -> None:
        """Flush the sink, then drop this context's tags.

        A flush marks the end of a unit of work on this context, so nothing
        tagged before it may leak into what runs next.
        """
        try:
            flush = getattr(self._sink, "flush", None)
            if flush is not None:
                flush()
        finally:
            if metrics.enabled():
                metrics.FLUSHES.inc()
            if self.current_tags:
                logger.debug("Clearing tags on flush: {}", self.current_tags)
            self.clear_tags()

    # -- forwarding --------------------------------------------------------

    def supports(self, name: str) -> bool:
        """Whether the wrapped sink offers ``name``."""
        return hasattr(self._sink, name)

    def __getattr__(self, name: str) -> Any:
        # Only called for names not found on TaggedLogger itself
        if name.startswith("__") or name in ("_sink", "_registry"):
            raise AttributeError(name)
        return getattr(self._sink, name)

    def __repr__(self) -> str:
        return f"TaggedLogger({self._sink!r})"


class _TaggedScope:
    """What ``TaggedLogger.tagged`` returns: a context manager and decorator.

    Each ``with`` entry (and each decorated call) pushes its own tags and
    pops exactly that many on exit, so one scope object can be reused and
    shared by concurrent callers.
    """

    def __init__(self, tagged_logger: TaggedLogger, tags: tuple):
        self._logger = tagged_logger
        self._tags = tags
        self._open: list[tuple[int, bool]] = []

    def __enter__(self) -> TaggedLogger:
        count = len(self._logger.push_tags(*self._tags))
        track = metrics.enabled()
        if track:
            metrics.ACTIVE_SCOPES.inc()
        self._open.append((count, track))
        return self._logger

    def __exit__(self, *exc_info) -> None:
        count, track = self._open.pop()
        if track:
            metrics.ACTIVE_SCOPES.dec()
        if count:
            self._logger.pop_tags(count)

    def __call__(self, func: Callable) -> Callable:
        if inspect.iscoroutinefunction(func):
            @functools.wraps(func)
            async def async_wrapper(*args, **kwargs):
                with self._logger.tagged(*self._tags):
                    return await func(*args, **kwargs)
            return async_wrapper

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            with self._logger.tagged(*self._tags):
                return func(*args, **kwargs)
        return wrapper


def wrap(sink: Any) -> TaggedLogger:
    """Return a TaggedLogger around ``sink``."""
    return TaggedLogger(sink)
