"""Set with constant-time uniform random selection."""

from __future__ import annotations

from typing import Dict, Generic, Hashable, Iterable, Iterator, List, Optional, TypeVar

import numpy as np

T = TypeVar("T", bound=Hashable)


class IndexedSet(Generic[T]):
    """Insertion, removal and uniform random pick in O(1).

    Items live in a dense list; removal swaps the last item into the freed slot.
    """

    def __init__(self, items: Optional[Iterable[T]] = None) -> None:
        self._items: List[T] = []
        self._index: Dict[T, int] = {}
        for item in items or ():
            self.add(item)

    def add(self, item: T) -> None:
        if item in self._index:
            return
        self._index[item] = len(self._items)
        self._items.append(item)

    def discard(self, item: T) -> None:
        pos = self._index.pop(item, None)
        if pos is None:
            return
        last = self._items.pop()
        if pos < len(self._items):
            self._items[pos] = last
            self._index[last] = pos

    def random_element(self, rng: np.random.Generator) -> T:
        if not self._items:
            raise KeyError("random_element from an empty IndexedSet")
        return self._items[int(rng.integers(len(self._items)))]

    def pop_random(self, rng: np.random.Generator) -> T:
        item = self.random_element(rng)
        self.discard(item)
        return item

    def __contains__(self, item: object) -> bool:
        return item in self._index

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items))

    def __repr__(self) -> str:
        return f"IndexedSet(size={len(self._items)})"


__all__ = ["IndexedSet"]
