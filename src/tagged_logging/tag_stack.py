"""Ordered tag stack for a single execution context."""

from collections.abc import Iterable, Iterator
from typing import Any


def normalize_tags(tags: Any) -> list[str]:
    """Flatten arbitrarily nested tag input into a list of clean tags.

    Strings are taken whole (never split into characters), other scalars go
    through ``str()``. Every tag is stripped; ``None`` and blank values are
    dropped.
    """
    flat: list[str] = []
    _flatten_into(tags, flat)
    return flat


def _flatten_into(value: Any, out: list[str]) -> None:
    if value is None:
        return
    if isinstance(value, (bytes, bytearray, memoryview)):
        value = bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, str):
        tag = value.strip()
        if tag:
            out.append(tag)
        return
    if isinstance(value, Iterable):
        for item in value:
            _flatten_into(item, out)
        return
    tag = str(value).strip()
    if tag:
        out.append(tag)


class TagStack:
    """Tags currently active in one execution context, outermost first."""

    def __init__(self, tags: Iterable[Any] = ()):
        self._tags: list[str] = normalize_tags(tags)

    def push(self, *tags: Any) -> list[str]:
        """Append normalized tags; return exactly what was appended."""
        new_tags = normalize_tags(tags)
        self._tags.extend(new_tags)
        return new_tags

    def pop(self, count: int = 1) -> list[str]:
        """Remove the last ``count`` tags and return them in stack order."""
        if count <= 0:
            return []
        removed = self._tags[-count:]
        del self._tags[-count:]
        return removed

    def clear(self) -> list[str]:
        self._tags.clear()
        return []

    def format(self) -> str:
        if not self._tags:
            return ""
        return " ".join(f"[{tag}]" for tag in self._tags) + " "

    @property
    def tags(self) -> tuple[str, ...]:
        return tuple(self._tags)

    def __len__(self) -> int:
        return len(self._tags)

    def __bool__(self) -> bool:
        return bool(self._tags)

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._tags))

    def __repr__(self) -> str:
        return f"TagStack({self._tags!r})"
