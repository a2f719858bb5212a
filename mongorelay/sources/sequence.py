from __future__ import annotations

from typing import Any, Generic, Sequence, TypeVar

T = TypeVar("T")


class SequenceSource(Generic[T]):
    """Connection source over an in-memory sequence.

    The sequence itself is shared between duplicates and never modified; only
    the window is per instance.
    """

    def __init__(self, items: Sequence[T], skip_count: int = 0, limit_count: int | None = None) -> None:
        self._items = items
        self._skip_count = skip_count
        self._limit_count = limit_count

    def duplicate(self) -> SequenceSource[T]:
        return SequenceSource(self._items, self._skip_count, self._limit_count)

    def configure_window(self, skip: int, limit: int) -> None:
        self._skip_count = skip
        self._limit_count = limit

    async def count(self) -> int:
        return len(self._items)

    async def fetch(self) -> list[T]:
        stop = None if self._limit_count is None else self._skip_count + self._limit_count
        return list(self._items[self._skip_count:stop])

    def __repr__(self) -> str:
        return f"SequenceSource(len={len(self._items)}, window={self._skip_count}:{self._limit_count})"
