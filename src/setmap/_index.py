from __future__ import annotations

__all__ = ["ElementIndex"]

from typing import Generic, Hashable, Iterable, TypeVar

from ._canonical_key import CanonicalKey, unique_elements

Element = TypeVar("Element", bound=Hashable)


class ElementIndex(Generic[Element]):
    """Map from each element to the canonical keys that contain it.

    Each row is an insertion-ordered dict used as a set of canonical keys.
    Since canonical keys hash by identity, row membership is exact identity.
    An element has a row only while at least one registered key contains it.
    """

    def __init__(self):
        self._rows: dict[Element, dict[CanonicalKey[Element], None]] = {}

    def __len__(self) -> int:
        return len(self._rows)

    def __contains__(self, element: object) -> bool:
        return element in self._rows

    def elements(self) -> tuple[Element, ...]:
        return tuple(self._rows)

    def row(self, element: Element) -> tuple[CanonicalKey[Element], ...]:
        return tuple(self._rows.get(element, ()))

    def is_registered(self, key: CanonicalKey[Element]) -> bool:
        if len(key) == 0:
            return False
        first = next(iter(key))
        return key in self._rows.get(first, ())

    def resolve(self, candidate: Iterable[Element]) -> CanonicalKey[Element] | None:
        """Find the registered canonical key with exactly the elements of `candidate`.

        Returns `None` if there is no such key. An empty candidate never
        resolves.
        """
        if isinstance(candidate, CanonicalKey) and self.is_registered(candidate):
            return candidate

        elements = unique_elements(candidate)
        cardinality = len(elements)
        if cardinality == 0:
            return None

        # Only keys of the same size can have exactly these elements
        potential_rows = []
        for element in elements:
            row = self._rows.get(element)
            if row is None:
                return None
            potential_rows.append([key for key in row if len(key) == cardinality])

        # Fewest candidates first
        potential_rows.sort(key=len)

        smallest = potential_rows[0]
        if not smallest:
            return None

        # Rows are identity sets, so the filtered lists need not be searched
        for key in smallest:
            if all(key in self._rows[element] for element in elements):
                return key

        return None

    def register(self, key: CanonicalKey[Element]) -> None:
        for element in key:
            self._rows.setdefault(element, {})[key] = None

    def unregister(self, key: CanonicalKey[Element]) -> None:
        for element in key:
            row = self._rows[element]
            del row[key]
            if not row:
                del self._rows[element]

    def clear(self) -> None:
        self._rows.clear()
