"""
Faceted filtering core.

Index building is a pure function of the catalog; the state machine owns
one user's selection and recomputes value state on every change.
"""

from facetfilter.filtering.state_machine import (
    FilterStateMachine,
    Selection,
    StateTable,
    compute_state,
)
from facetfilter.filtering.value_index import (
    Item,
    ValueIndex,
    build_value_index,
    dimension_name,
)

__all__ = [
    # Index builder
    "Item",
    "ValueIndex",
    "build_value_index",
    "dimension_name",
    # State machine
    "FilterStateMachine",
    "Selection",
    "StateTable",
    "compute_state",
]
