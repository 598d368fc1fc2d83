"""Set with deterministic, insertion-ordered iteration."""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Iterator
from typing import Generic, TypeVar

T = TypeVar("T", bound=Hashable)


class OrderedSet(Generic[T]):
    """Unique items kept in first-insertion order.

    Adding an item that is already present does not move it.  Used wherever
    a deduplicated collection feeds byte-exact output.
    """

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._items: dict[T, None] = {}
        self.update(items)

    def add(self, item: T) -> bool:
        """Add *item*; return ``True`` if it was not present before."""
        if item in self._items:
            return False
        self._items[item] = None
        return True

    def update(self, items: Iterable[T]) -> None:
        for item in items:
            self.add(item)

    def to_list(self) -> list[T]:
        return list(self._items)

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"OrderedSet({list(self._items)!r})"
