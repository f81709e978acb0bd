# search/heap.py
from __future__ import annotations

import sys
from collections import Counter
from collections.abc import Callable, Iterator
from typing import Generic, TypeVar

from astar3d.errors import HeapCapacityError, HeapEmptyError

T = TypeVar("T")

MAX_CAPACITY = sys.maxsize


def _identity(v):
    return v


class MinHeap(Generic[T]):
    """
    Array-backed binary min-heap ordered by `key(value)`.

    Children of slot i live at 2i+1 and 2i+2. Priorities are read live from
    the stored values, so a value whose priority drops while queued must be
    re-positioned with `decrease_key`. Membership is by identity, not
    equality. Equal priorities pop in no particular order.
    """

    def __init__(self, key: Callable[[T], float] | None = None, *, capacity: int = MAX_CAPACITY):
        self._key = key or _identity
        self._capacity = capacity
        self._items: list[T] = []
        self._members: Counter[int] = Counter()  # id(value) -> occurrences

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        # storage order, not priority order
        return iter(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def contains(self, value: T) -> bool:
        return self._members[id(value)] > 0

    __contains__ = contains

    def peek(self) -> T:
        if not self._items:
            raise HeapEmptyError("peek at empty heap")
        return self._items[0]

    def push(self, value: T) -> None:
        if len(self._items) >= self._capacity:
            raise HeapCapacityError(f"heap is at maximum capacity ({self._capacity})")
        self._items.append(value)
        self._members[id(value)] += 1
        self._float_up(len(self._items) - 1)

    def pop_min(self) -> T:
        items = self._items
        if not items:
            raise HeapEmptyError("pop from empty heap")
        if len(items) == 1:
            top = items.pop()
        else:
            top = items[0]
            items[0] = items.pop()
            self._sink_down(0)
        self._forget(top)
        return top

    def decrease_key(self, value: T) -> None:
        """Restore heap order after `value`'s priority was lowered in place."""
        for i, v in enumerate(self._items):
            if v is value:
                self._float_up(i)
                return
        raise KeyError(f"{value!r} is not in the heap")

    def clear(self) -> None:
        self._items.clear()
        self._members.clear()

    # --------------- internals ---------------------

    def _forget(self, value: T) -> None:
        k = id(value)
        self._members[k] -= 1
        if self._members[k] <= 0:
            del self._members[k]

    def _float_up(self, i: int) -> None:
        items, key = self._items, self._key
        while i > 0:
            parent = (i - 1) // 2
            if key(items[i]) < key(items[parent]):
                items[i], items[parent] = items[parent], items[i]
                i = parent
            else:
                break

    def _sink_down(self, i: int) -> None:
        items, key = self._items, self._key
        n = len(items)
        while True:
            left, right = 2 * i + 1, 2 * i + 2
            if left >= n:
                return
            child = left
            if right < n and key(items[right]) < key(items[left]):
                child = right
            if key(items[child]) < key(items[i]):
                items[i], items[child] = items[child], items[i]
                i = child
            else:
                return

    def is_valid(self) -> bool:
        """True when every element's priority is >= its parent's."""
        key = self._key
        return all(
            key(self._items[i]) >= key(self._items[(i - 1) // 2]) for i in range(1, len(self._items))
        )
