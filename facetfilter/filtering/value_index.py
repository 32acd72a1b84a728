"""
Value Index — co-occurrence lookup built from a catalog.

For every dimension D and every value v observed in D, the index records
the set of values seen in each other dimension on items where D == v.
The filter state machine only ever asks membership questions of these
sets, so they are stored deduplicated.

INVARIANTS:
- Pure: building never mutates the items
- No entry exists for a (dimension, value) pair absent from the catalog
- A failed build leaves nothing behind (no partial index is returned)
"""

import logging
from collections.abc import Hashable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum

from facetfilter.models.errors import MalformedItemError, UnknownValueError

logger = logging.getLogger(__name__)

# One catalog record: dimension name -> value
Item = Mapping[str, Hashable]

# Per dimension: value -> other dimension -> co-occurring values
CoOccurrence = dict[Hashable, dict[str, frozenset[Hashable]]]


def dimension_name(dimension: str) -> str:
    """Plain string name for a dimension, unwrapping str enums."""
    if isinstance(dimension, Enum):
        return str(dimension.value)
    return str(dimension)


def _normalize_dimensions(dimensions: Sequence[str]) -> tuple[str, ...]:
    names = tuple(dimension_name(d) for d in dimensions)
    if not names:
        raise ValueError("At least one dimension is required")
    if len(set(names)) != len(names):
        raise ValueError(f"Duplicate dimension names in {list(names)}")
    return names


@dataclass(frozen=True, slots=True)
class ValueIndex:
    """
    Immutable co-occurrence index over a fixed, ordered set of dimensions.

    Entries are stored positionally, one per dimension, in declared order.
    Values inside a dimension keep first-appearance order.
    """

    dimensions: tuple[str, ...]
    item_count: int
    _entries: tuple[CoOccurrence, ...]

    def position(self, dimension: str) -> int:
        """
        Slot of a dimension in declared order.

        Raises:
            KeyError: If the dimension is not part of this index
        """
        name = dimension_name(dimension)
        try:
            return self.dimensions.index(name)
        except ValueError:
            raise KeyError(name) from None

    def values(self, dimension: str) -> tuple[Hashable, ...]:
        """All values observed in a dimension, in first-appearance order."""
        return tuple(self._entries[self.position(dimension)])

    def resolve(self, dimension: str, value: Hashable) -> int:
        """
        Validate an indexed (dimension, value) pair and return the dimension slot.

        Raises:
            UnknownValueError: If the dimension or value was never indexed
        """
        name = dimension_name(dimension)
        if name not in self.dimensions:
            raise UnknownValueError(name, value)
        slot = self.dimensions.index(name)
        if value not in self._entries[slot]:
            raise UnknownValueError(name, value)
        return slot

    def co_occurring(
        self,
        dimension: str,
        value: Hashable,
        other: str,
    ) -> frozenset[Hashable]:
        """
        Values of `other` seen on the same items as `value` in `dimension`.

        Raises:
            UnknownValueError: If (dimension, value) was never indexed
            ValueError: If `other` is the same dimension
            KeyError: If `other` is not part of this index
        """
        slot = self.resolve(dimension, value)
        other_name = dimension_name(other)
        if other_name == self.dimensions[slot]:
            raise ValueError(f"Dimension '{other_name}' has no co-occurrence with itself")
        self.position(other_name)
        return self._entries[slot][value][other_name]

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        dimension, value = key
        try:
            self.resolve(dimension, value)
        except UnknownValueError:
            return False
        return True


def build_value_index(items: Iterable[Item], dimensions: Sequence[str]) -> ValueIndex:
    """
    Build the co-occurrence index for a catalog.

    Args:
        items: Catalog records, each supplying one value per dimension
        dimensions: Ordered dimension names

    Returns:
        ValueIndex over the given dimensions

    Raises:
        MalformedItemError: If an item lacks a value for a declared dimension
        ValueError: If dimensions is empty or has duplicates
    """
    names = _normalize_dimensions(dimensions)
    accumulated: list[dict[Hashable, dict[str, set[Hashable]]]] = [{} for _ in names]
    item_count = 0

    for position, item in enumerate(items):
        row: list[Hashable] = []
        for name in names:
            value = item.get(name)
            if value is None:
                raise MalformedItemError(position, name)
            row.append(value)

        for slot, value in enumerate(row):
            others = accumulated[slot].get(value)
            if others is None:
                others = {name: set() for name in names if name != names[slot]}
                accumulated[slot][value] = others
            for other_slot, other_value in enumerate(row):
                if other_slot != slot:
                    others[names[other_slot]].add(other_value)

        item_count += 1

    entries = tuple(
        {
            value: {other: frozenset(seen) for other, seen in others.items()}
            for value, others in per_dimension.items()
        }
        for per_dimension in accumulated
    )

    logger.info(
        "value_index_built",
        extra={
            "items": item_count,
            "values_per_dimension": {
                name: len(entries[slot]) for slot, name in enumerate(names)
            },
        },
    )

    return ValueIndex(dimensions=names, item_count=item_count, _entries=entries)
