from __future__ import annotations

__all__ = ["SetMap"]

import logging
from collections.abc import ItemsView, Mapping, MutableMapping, ValuesView
from typing import (
    AbstractSet,
    Any,
    Callable,
    Generic,
    Hashable,
    Iterable,
    Iterator,
    TypeVar,
)

from returns.maybe import Maybe, Nothing, Some

from ._canonical_key import CanonicalKey, unique_elements
from ._exceptions import EmptyKeyError, InconsistentIndexError
from ._index import ElementIndex

logger = logging.getLogger(__name__)

Element = TypeVar("Element", bound=Hashable)
Value = TypeVar("Value")
Result = TypeVar("Result")

_missing = object()


class SetMap(MutableMapping[AbstractSet[Element], Value], Generic[Element, Value]):
    """A mapping whose keys are unordered sets of elements.

    Any two keys with the same elements address the same entry, whatever their
    type or order. `{"a", "b"}`, `frozenset(["b", "a"])`, and `("a", "b")` are
    all the same key.

    Internally, each distinct element set is stored once as a `CanonicalKey`.
    Keys given back to the caller are always fresh copies built with
    `key_factory`, so mutating them cannot affect the map.

    Callbacks of the sequence-like operations are called as
    `callback(value, key, map)`, where `key` is a fresh copy.
    """

    def __init__(
        self,
        entries: Mapping[Iterable[Element], Value]
        | Iterable[tuple[Iterable[Element], Value]] = (),
        /,
        *,
        key_factory: Callable[[Iterable[Element]], AbstractSet[Element]] = frozenset,
    ):
        self._values: dict[CanonicalKey[Element], Value] = {}
        self._index: ElementIndex[Element] = ElementIndex()
        self.key_factory = key_factory

        if isinstance(entries, Mapping):
            entries = entries.items()
        for key, value in entries:
            self.upsert(key, value)

    def _user_facing_key(self, key: CanonicalKey[Element]) -> AbstractSet[Element]:
        return self.key_factory(key)

    def _derive(self) -> SetMap[Element, Any]:
        return SetMap(key_factory=self.key_factory)

    ##########
    # Lifecycle
    ##########

    @property
    def size(self) -> int:
        return len(self._values)

    def upsert(self, key: Iterable[Element], value: Value) -> SetMap[Element, Value]:
        if not isinstance(key, CanonicalKey):
            # Iterators can only be consumed once
            key = unique_elements(key)

        canonical_key = self._index.resolve(key)
        if canonical_key is not None:
            self._values[canonical_key] = value
            return self

        canonical_key = CanonicalKey(key)
        if len(canonical_key) == 0:
            raise EmptyKeyError()

        self._values[canonical_key] = value
        self._index.register(canonical_key)
        logger.debug("Created canonical key %r", canonical_key)
        return self

    def lookup(self, key: Iterable[Element]) -> Maybe[Value]:
        canonical_key = self._index.resolve(key)
        if canonical_key is None:
            return Nothing
        return Some(self._values[canonical_key])

    def contains(self, key: Iterable[Element]) -> bool:
        return self._index.resolve(key) is not None

    def remove(self, key: Iterable[Element]) -> bool:
        canonical_key = self._index.resolve(key)
        if canonical_key is None:
            return False

        self._discard(canonical_key)
        return True

    def _discard(self, canonical_key: CanonicalKey[Element]) -> Value:
        self._index.unregister(canonical_key)
        value = self._values.pop(canonical_key)
        logger.debug("Removed canonical key %r", canonical_key)
        return value

    def clear(self) -> None:
        self._values.clear()
        self._index.clear()

    ##########
    # Mapping protocol
    ##########

    def __len__(self) -> int:
        return len(self._values)

    def __getitem__(self, key: Iterable[Element]) -> Value:
        canonical_key = self._index.resolve(key)
        if canonical_key is None:
            raise KeyError(key)
        return self._values[canonical_key]

    def __setitem__(self, key: Iterable[Element], value: Value) -> None:
        self.upsert(key, value)

    def __delitem__(self, key: Iterable[Element]) -> None:
        if not self.remove(key):
            raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        return self.contains(key)

    def __iter__(self) -> Iterator[AbstractSet[Element]]:
        for key in self._values:
            yield self._user_facing_key(key)

    def __reversed__(self) -> Iterator[AbstractSet[Element]]:
        for key in reversed(self._values):
            yield self._user_facing_key(key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mapping):
            return NotImplemented
        if len(self) != len(other):
            return False
        # Distinct keys of other may still have the same elements
        matched = set()
        for key, value in other.items():
            canonical_key = self._index.resolve(key)
            if canonical_key is None or canonical_key in matched:
                return False
            if self._values[canonical_key] != value:
                return False
            matched.add(canonical_key)
        return True

    def get(self, key: Iterable[Element], default: Any = None) -> Value | Any:
        return self.lookup(key).value_or(default)

    def pop(self, key: Iterable[Element], default: Any = _missing) -> Value | Any:
        canonical_key = self._index.resolve(key)
        if canonical_key is None:
            if default is _missing:
                raise KeyError(key)
            return default
        return self._discard(canonical_key)

    def popitem(self) -> tuple[AbstractSet[Element], Value]:
        if len(self._values) == 0:
            raise KeyError("popitem(): SetMap is empty")
        canonical_key = next(iter(self._values))
        return self._user_facing_key(canonical_key), self._discard(canonical_key)

    def setdefault(self, key: Iterable[Element], default: Any = None) -> Value | Any:
        if not isinstance(key, CanonicalKey):
            # Iterators can only be consumed once
            key = unique_elements(key)

        canonical_key = self._index.resolve(key)
        if canonical_key is not None:
            return self._values[canonical_key]

        self.upsert(key, default)
        return default

    def entries(self) -> Iterator[tuple[AbstractSet[Element], Value]]:
        for key, value in self._values.items():
            yield self._user_facing_key(key), value

    def items(self) -> SetMapItemsView[Element, Value]:
        return SetMapItemsView(self)

    def values(self) -> SetMapValuesView[Value]:
        return SetMapValuesView(self)

    def copy(self) -> SetMap[Element, Value]:
        result = self._derive()
        for key, value in self.entries():
            result.upsert(key, value)
        return result

    def __enter__(self) -> SetMap[Element, Value]:
        return self

    def __exit__(self, *exc_info) -> None:
        self.clear()

    def __repr__(self) -> str:
        entries = ", ".join(f"{key!r}: {value!r}" for key, value in self.entries())
        return f"SetMap({{{entries}}})"

    ##########
    # Sequence-like operations
    ##########

    def for_each(
        self, callback: Callable[[Value, AbstractSet[Element], SetMap[Element, Value]], Any]
    ) -> None:
        for key, value in self.entries():
            callback(value, key, self)

    def every(
        self, predicate: Callable[[Value, AbstractSet[Element], SetMap[Element, Value]], bool]
    ) -> bool:
        return all(predicate(value, key, self) for key, value in self.entries())

    def some(
        self, predicate: Callable[[Value, AbstractSet[Element], SetMap[Element, Value]], bool]
    ) -> bool:
        return any(predicate(value, key, self) for key, value in self.entries())

    def find(
        self, predicate: Callable[[Value, AbstractSet[Element], SetMap[Element, Value]], bool]
    ) -> Maybe[tuple[AbstractSet[Element], Value]]:
        for key, value in self.entries():
            if predicate(value, key, self):
                return Some((key, value))
        return Nothing

    def includes(self, value: object) -> bool:
        return any(v is value or v == value for v in self._values.values())

    def map(
        self, function: Callable[[Value, AbstractSet[Element], SetMap[Element, Value]], Result]
    ) -> list[Result]:
        return [function(value, key, self) for key, value in self.entries()]

    def flat_map(
        self,
        function: Callable[
            [Value, AbstractSet[Element], SetMap[Element, Value]], Iterable[Result]
        ],
    ) -> list[Result]:
        return [item for key, value in self.entries() for item in function(value, key, self)]

    def reduce(
        self,
        function: Callable[[Result, Value, AbstractSet[Element], SetMap[Element, Value]], Result],
        initial: Result,
    ) -> Result:
        accumulator = initial
        for key, value in self.entries():
            accumulator = function(accumulator, value, key, self)
        return accumulator

    def reduce_right(
        self,
        function: Callable[[Result, Value, AbstractSet[Element], SetMap[Element, Value]], Result],
        initial: Result,
    ) -> Result:
        accumulator = initial
        for key, value in reversed(self._values.items()):
            accumulator = function(accumulator, value, self._user_facing_key(key), self)
        return accumulator

    def filter(
        self, predicate: Callable[[Value, AbstractSet[Element], SetMap[Element, Value]], bool]
    ) -> SetMap[Element, Value]:
        result = self._derive()
        for key, value in self.entries():
            if predicate(value, key, self):
                result.upsert(key, value)
        return result

    def map_over(
        self, function: Callable[[Value, AbstractSet[Element], SetMap[Element, Value]], Result]
    ) -> SetMap[Element, Result]:
        result = self._derive()
        for key, value in self.entries():
            result.upsert(key, function(value, key, self))
        return result

    ##########
    # Diagnostics
    ##########

    def check_consistency(self) -> None:
        """Raise `InconsistentIndexError` unless the element index matches the stored keys."""
        seen_element_sets = set()
        for key in self._values:
            if len(key) == 0:
                raise InconsistentIndexError(f"an empty key is stored as {key!r}")

            element_set = frozenset(key)
            if element_set in seen_element_sets:
                raise InconsistentIndexError(f"{key!r} is stored more than once")
            seen_element_sets.add(element_set)

            for element in key:
                if key not in self._index.row(element):
                    raise InconsistentIndexError(f"{key!r} is missing from the row of {element!r}")

        for element in self._index.elements():
            row = self._index.row(element)
            if len(row) == 0:
                raise InconsistentIndexError(f"the row of {element!r} is empty")
            for key in row:
                if key not in self._values:
                    raise InconsistentIndexError(
                        f"removed key {key!r} remains in the row of {element!r}"
                    )
                if element not in key:
                    raise InconsistentIndexError(f"{key!r} is in the row of {element!r}")


class SetMapItemsView(ItemsView[AbstractSet[Element], Value]):
    _mapping: SetMap[Element, Value]

    def __iter__(self) -> Iterator[tuple[AbstractSet[Element], Value]]:
        return self._mapping.entries()


class SetMapValuesView(ValuesView[Value]):
    _mapping: SetMap[Any, Value]

    def __iter__(self) -> Iterator[Value]:
        return iter(self._mapping._values.values())
