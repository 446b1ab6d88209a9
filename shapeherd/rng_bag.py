"""A bag that hands out its items in random order, refilling when empty."""

from __future__ import annotations

import random
from typing import Generic, Iterable, List, Optional, Tuple, TypeVar

T = TypeVar("T")


class RngBag(Generic[T]):
    """Draw items without replacement; start over once all have been drawn."""

    def __init__(self, items: Iterable[T], rng: Optional[random.Random] = None) -> None:
        self._original: Tuple[T, ...] = tuple(items)
        self._items: List[T] = list(self._original)
        self._rng = rng if rng is not None else random.Random()

    def get(self) -> T:
        if not self._items:
            self._items = list(self._original)
        if not self._items:
            raise IndexError("cannot draw from an empty bag")
        index = self._rng.randrange(len(self._items))
        return self._items.pop(index)