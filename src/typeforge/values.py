"""Foundational value representations used by the type catalog.

This module provides the concrete values the catalog types describe:
- Collection: Immutable ordered container (the canonical sequence form)
- ValueKind: Closed set of value tags used by constraint predicates
- classify: Map any Python value onto exactly one ValueKind

File handles are represented by ``pathlib.Path``; this module only tags them.
"""

from enum import Enum
from pathlib import Path
from typing import Any, Callable, Iterable, Iterator, List, Optional


class ValueKind(Enum):
    """Tag describing which representation a raw value has.

    Constraint predicates match on these tags instead of probing
    arbitrary objects for methods.
    """
    SEQUENCE = "sequence"      # plain list or tuple
    COLLECTION = "collection"  # typeforge.values.Collection
    FILE = "file"              # pathlib.Path
    STRING = "string"          # str
    MAPPING = "mapping"        # plain dict
    OTHER = "other"


class Collection:
    """Immutable ordered container of arbitrary values.

    The canonical representation for ordered data in the catalog. Unlike a
    list it cannot be modified in place: every transformation returns a new
    Collection, so values stored on host objects stay stable.

    Example:
        >>> c = Collection(1, 2, 3)
        >>> c.map(lambda x: x * 2)
        Collection(2, 4, 6)
    """

    __slots__ = ("_items",)

    def __init__(self, *items: Any):
        object.__setattr__(self, "_items", tuple(items))

    @classmethod
    def from_iterable(cls, items: Iterable[Any]) -> "Collection":
        """Build a Collection from any iterable, preserving order."""
        return cls(*items)

    def __setattr__(self, name, value):
        raise AttributeError(f"Collection is immutable, cannot set '{name}'")

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return Collection(*self._items[index])
        return self._items[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Collection):
            return NotImplemented
        return self._items == other._items

    def __hash__(self) -> int:
        return hash((Collection, self._items))

    def __repr__(self) -> str:
        return f"Collection({', '.join(repr(item) for item in self._items)})"

    def size(self) -> int:
        """Number of elements."""
        return len(self._items)

    def map(self, fn: Callable[[Any], Any]) -> "Collection":
        """Apply fn to every element, in order, returning a new Collection."""
        return Collection(*(fn(item) for item in self._items))

    def grep(self, predicate: Callable[[Any], bool]) -> "Collection":
        """Keep only elements for which predicate is true."""
        return Collection(*(item for item in self._items if predicate(item)))

    def first(self, predicate: Optional[Callable[[Any], bool]] = None) -> Any:
        """Return the first element (matching predicate, if given) or None."""
        for item in self._items:
            if predicate is None or predicate(item):
                return item
        return None

    def each(self, fn: Callable[[Any], Any]) -> "Collection":
        """Call fn for every element; returns self for chaining."""
        for item in self._items:
            fn(item)
        return self

    def join(self, separator: str = "") -> str:
        """Join the string forms of all elements."""
        return separator.join(str(item) for item in self._items)

    def to_list(self) -> List[Any]:
        """Export elements as a new plain list."""
        return list(self._items)


def classify(value: Any) -> ValueKind:
    """Return the ValueKind tag for value.

    Strings are never treated as sequences even though they are iterable.
    """
    if isinstance(value, Collection):
        return ValueKind.COLLECTION
    if isinstance(value, Path):
        return ValueKind.FILE
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, (list, tuple)):
        return ValueKind.SEQUENCE
    if isinstance(value, dict):
        return ValueKind.MAPPING
    return ValueKind.OTHER
