"""Open list for A*: an indexed binary heap with in-place priority decrease."""

from __future__ import annotations

import itertools
from typing import Generic, Hashable, TypeVar

from .errors import EmptyFrontierError

K = TypeVar("K", bound=Hashable)


class OpenFrontier(Generic[K]):
    """Min-priority queue keyed by hashable items (cell coordinates).

    Entries are ordered by ``(priority, sequence)`` where ``sequence`` is the
    insertion counter, so equal priorities leave in FIFO order.  A decreased
    entry keeps its original sequence number.  ``_index`` maps each key to its
    slot in ``_heap`` so decrease_priority never has to search.
    """

    def __init__(self) -> None:
        self._heap: list[list] = []  # [priority, seq, key]
        self._index: dict[K, int] = {}
        self._counter = itertools.count()

    def __len__(self) -> int:
        return len(self._heap)

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def is_empty(self) -> bool:
        return not self._heap

    def priority(self, key: K) -> int:
        return self._heap[self._index[key]][0]

    def peek(self) -> K:
        if not self._heap:
            raise EmptyFrontierError("peek() on an empty frontier")
        return self._heap[0][2]

    def insert(self, key: K, priority: int) -> None:
        if key in self._index:
            raise ValueError(f"{key!r} is already in the frontier")
        entry = [priority, next(self._counter), key]
        self._heap.append(entry)
        self._index[key] = len(self._heap) - 1
        self._sift_up(len(self._heap) - 1)

    def extract_min(self) -> K:
        if not self._heap:
            raise EmptyFrontierError("extract_min() on an empty frontier")
        top = self._heap[0]
        last = self._heap.pop()
        del self._index[top[2]]
        if self._heap:
            self._heap[0] = last
            self._index[last[2]] = 0
            self._sift_down(0)
        return top[2]

    def decrease_priority(self, key: K, new_priority: int) -> None:
        pos = self._index[key]
        entry = self._heap[pos]
        if new_priority > entry[0]:
            raise ValueError(f"cannot raise priority of {key!r} from {entry[0]} to {new_priority}")
        entry[0] = new_priority
        self._sift_up(pos)

    # -- heap internals ------------------------------------------------------

    @staticmethod
    def _less(a: list, b: list) -> bool:
        return (a[0], a[1]) < (b[0], b[1])

    def _place(self, pos: int, entry: list) -> None:
        self._heap[pos] = entry
        self._index[entry[2]] = pos

    def _sift_up(self, pos: int) -> None:
        heap = self._heap
        entry = heap[pos]
        while pos > 0:
            parent = (pos - 1) >> 1
            if not self._less(entry, heap[parent]):
                break
            self._place(pos, heap[parent])
            pos = parent
        self._place(pos, entry)

    def _sift_down(self, pos: int) -> None:
        heap = self._heap
        size = len(heap)
        entry = heap[pos]
        while True:
            child = 2 * pos + 1
            if child >= size:
                break
            right = child + 1
            if right < size and self._less(heap[right], heap[child]):
                child = right
            if not self._less(heap[child], entry):
                break
            self._place(pos, heap[child])
            pos = child
        self._place(pos, entry)
