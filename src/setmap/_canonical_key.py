from __future__ import annotations

__all__ = ["CanonicalKey", "unique_elements"]

from typing import AbstractSet, Hashable, Iterable, Iterator, TypeVar

Element = TypeVar("Element", bound=Hashable, covariant=True)


def unique_elements(elements: Iterable[Element], /) -> tuple[Element, ...]:
    # Rely on stable dictionary
    return tuple({element: None for element in elements})


class CanonicalKey(AbstractSet[Element]):
    """The single stored representative of every key with the same elements.

    Equality and hashing are by identity, so a canonical key can be used in
    exact-identity stores. Content comparisons go through the set operators
    inherited from `AbstractSet` (`<=`, `>=`, `isdisjoint`) or through the
    copies a `SetMap` hands out.
    """

    __slots__ = ("_items", "_set")

    def __init__(self, elements: Iterable[Element]):
        self._items = unique_elements(elements)
        self._set = frozenset(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, x: object) -> bool:
        return x in self._set

    def __iter__(self) -> Iterator[Element]:
        return iter(self._items)

    __eq__ = object.__eq__
    __ne__ = object.__ne__
    __hash__ = object.__hash__

    def __repr__(self) -> str:
        return f"CanonicalKey({', '.join(repr(item) for item in self._items)})"
