"""Aggregation of the lowest N values seen."""

from __future__ import annotations

import heapq
from typing import Any, Callable, Generic, List, Optional, TypeVar

T = TypeVar("T")


class _Entry:
    __slots__ = ("key", "value")

    def __init__(self, key: Any, value: Any) -> None:
        self.key = key
        self.value = value

    def __lt__(self, other: _Entry) -> bool:
        # Inverted so that heapq keeps the largest key on top.
        return other.key < self.key


class BottomN(Generic[T]):
    """Keeps the ``max_size`` smallest values pushed, ordered by ``key``."""

    def __init__(self, max_size: int, key: Optional[Callable[[T], Any]] = None) -> None:
        if max_size < 0:
            raise ValueError("max_size must not be negative")
        self._max_size = max_size
        self._key: Callable[[T], Any] = key if key is not None else (lambda v: v)
        self._heap: List[_Entry] = []

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def top(self) -> T:
        """The largest of the values kept."""
        if not self._heap:
            raise IndexError("top of an empty BottomN")
        return self._heap[0].value

    def push(self, value: T) -> None:
        """Offer a value; it is kept only if it is among the smallest."""
        entry = _Entry(self._key(value), value)
        if len(self._heap) < self._max_size or (
            self._heap and entry.key < self._heap[0].key
        ):
            heapq.heappush(self._heap, entry)
            if len(self._heap) > self._max_size:
                heapq.heappop(self._heap)

    def pop(self) -> List[T]:
        """Remove every value kept and return them in ascending order."""
        result = []
        while self._heap:
            result.append(heapq.heappop(self._heap).value)
        result.reverse()
        return result