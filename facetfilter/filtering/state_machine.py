"""
Filter State Machine — selection ownership and derived value state.

Holds at most one selected value per dimension. Every change to the
selection rebuilds the full value state from scratch against the index;
nothing is patched in place.

INVARIANTS:
- A selected value is never disabled (a dimension never checks itself)
- Disablement is the union, over selected dimensions, of values with no
  co-occurrence with that selection; evaluation order does not matter
- Toggling a disabled value is a no-op
- A failed toggle leaves selection and state untouched
"""

import logging
from collections.abc import Hashable

from facetfilter.filtering.value_index import ValueIndex
from facetfilter.models.facet import FacetButton, ValueState

logger = logging.getLogger(__name__)

# One slot per dimension; None means no filter on that dimension
Selection = tuple[Hashable | None, ...]

# One value -> state map per dimension, in declared order
StateTable = tuple[dict[Hashable, ValueState], ...]


def compute_state(index: ValueIndex, selection: Selection) -> StateTable:
    """
    Derive the value state for a selection.

    Pure function: returns a fresh table and never mutates its inputs.
    """
    dimensions = index.dimensions
    disabled: list[set[Hashable]] = [set() for _ in dimensions]

    for slot, selected in enumerate(selection):
        if selected is None:
            continue
        for other_slot, other in enumerate(dimensions):
            if other_slot == slot:
                continue
            compatible = index.co_occurring(dimensions[slot], selected, other)
            for value in index.values(other):
                if value not in compatible:
                    disabled[other_slot].add(value)

    return tuple(
        {
            value: ValueState(
                selected=value == selection[slot],
                disabled=value in disabled[slot],
            )
            for value in index.values(dimension)
        }
        for slot, dimension in enumerate(dimensions)
    )


class FilterStateMachine:
    """
    One user's faceted filter over a shared, read-only ValueIndex.

    Usage:
        machine = FilterStateMachine(index)
        machine.toggle("colors", "red")
        for row in machine.buttons():
            ...
    """

    def __init__(self, index: ValueIndex) -> None:
        self.index = index
        self._selection: Selection = (None,) * len(index.dimensions)
        self._state: StateTable = compute_state(index, self._selection)

    @property
    def selection(self) -> Selection:
        return self._selection

    @property
    def state(self) -> StateTable:
        return self._state

    def state_of(self, dimension: str, value: Hashable) -> ValueState:
        """
        Current flags for a value.

        Raises:
            UnknownValueError: If (dimension, value) was never indexed
        """
        slot = self.index.resolve(dimension, value)
        return self._state[slot][value]

    def selected_value(self, dimension: str) -> Hashable | None:
        """The active filter for a dimension, or None."""
        return self._selection[self.index.position(dimension)]

    def active_selection(self) -> dict[str, Hashable | None]:
        """Selection keyed by dimension name."""
        return dict(zip(self.index.dimensions, self._selection, strict=True))

    def toggle(self, dimension: str, value: Hashable) -> None:
        """
        Activate a value, or clear it if it is already the active one.

        Disabled values are ignored silently, judged against the state
        as it was before this call.

        Raises:
            UnknownValueError: If (dimension, value) was never indexed
        """
        slot = self.index.resolve(dimension, value)

        if self._state[slot][value].disabled:
            logger.debug(
                "filter_toggle_ignored",
                extra={"dimension": self.index.dimensions[slot], "value": value},
            )
            return

        updated = list(self._selection)
        updated[slot] = None if updated[slot] == value else value
        self._apply(tuple(updated))

        logger.debug(
            "filter_toggled",
            extra={
                "dimension": self.index.dimensions[slot],
                "value": value,
                "selection": self.active_selection(),
            },
        )

    def clear(self) -> None:
        """Drop every selection, returning to the initial state."""
        self._apply((None,) * len(self.index.dimensions))

    def buttons(self) -> list[list[FacetButton]]:
        """
        Rows of controls for the presentation layer.

        One row per dimension in declared order; values within a row keep
        their first-appearance order from the catalog.
        """
        return [
            [
                FacetButton(
                    dimension=dimension,
                    value=value,
                    selected=flags.selected,
                    disabled=flags.disabled,
                )
                for value, flags in self._state[slot].items()
            ]
            for slot, dimension in enumerate(self.index.dimensions)
        ]

    def _apply(self, selection: Selection) -> None:
        # Both fields are replaced together, after the new state exists
        state = compute_state(self.index, selection)
        self._selection = selection
        self._state = state
