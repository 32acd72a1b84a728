from collections.abc import Hashable
from dataclasses import dataclass
from enum import Enum


class ShoeDimension(str, Enum):
    """Dimensions of the bundled shoe catalog, in display order."""

    COLORS = "colors"
    SIZES = "sizes"
    WIDTHS = "widths"


DEFAULT_DIMENSIONS: tuple[str, ...] = tuple(d.value for d in ShoeDimension)


@dataclass(frozen=True, slots=True)
class ValueState:
    """
    Derived flags for one (dimension, value) pair.

    Attributes:
        selected: Value is the active filter for its own dimension
        disabled: Value never co-occurs with the selection of some other dimension
    """

    selected: bool = False
    disabled: bool = False


@dataclass(frozen=True, slots=True)
class FacetButton:
    """One clickable control as handed to the presentation layer."""

    dimension: str
    value: Hashable
    selected: bool
    disabled: bool
