"""Per-execution-context tag stack registry."""

import asyncio
import threading
import weakref
from typing import Any

from .tag_stack import TagStack


def current_context() -> Any:
    """Identity of the running execution context.

    The current asyncio task when called from inside one, otherwise the
    current thread.
    """
    try:
        task = asyncio.current_task()
    except RuntimeError:
        # No running event loop in this thread
        task = None
    return task if task is not None else threading.current_thread()


class TagRegistry:
    """Thread-safe map of execution context -> TagStack.

    Contexts are held weakly, so a finished thread or task drops its stack.
    Only the mapping itself is locked: a stack is only touched by the
    context that owns it.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._stacks: weakref.WeakKeyDictionary[Any, TagStack] = weakref.WeakKeyDictionary()

    def get(self) -> TagStack:
        """Return the current context's stack, creating it on first use."""
        ctx = current_context()
        with self._lock:
            stack = self._stacks.get(ctx)
            if stack is None:
                stack = TagStack()
                self._stacks[ctx] = stack
            return stack

    def peek(self) -> TagStack | None:
        """Current context's stack, or None if it never tagged anything."""
        ctx = current_context()
        with self._lock:
            return self._stacks.get(ctx)

    def discard(self) -> None:
        ctx = current_context()
        with self._lock:
            self._stacks.pop(ctx, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._stacks)
