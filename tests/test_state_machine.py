"""
Tests for the Filter State Machine.

INVARIANT: A selected value is never disabled.
INVARIANT: Disablement is the union over selected dimensions of values
with no co-occurrence with that selection.
INVARIANT: Toggling a disabled value changes nothing.
INVARIANT: Unknown values are rejected without touching state.
"""

import itertools

import pytest

from facetfilter.filtering.state_machine import (
    FilterStateMachine,
    StateTable,
    compute_state,
)
from facetfilter.filtering.value_index import ValueIndex, build_value_index
from facetfilter.models.errors import UnknownValueError
from facetfilter.models.facet import ShoeDimension, ValueState


def disabled_pairs(index: ValueIndex, state: StateTable) -> set[tuple[str, str]]:
    """All (dimension, value) pairs flagged disabled."""
    return {
        (dimension, value)
        for slot, dimension in enumerate(index.dimensions)
        for value, flags in state[slot].items()
        if flags.disabled
    }


def selected_pairs(index: ValueIndex, state: StateTable) -> set[tuple[str, str]]:
    return {
        (dimension, value)
        for slot, dimension in enumerate(index.dimensions)
        for value, flags in state[slot].items()
        if flags.selected
    }


# =============================================================================
# INITIAL STATE
# =============================================================================


class TestInitialState:
    def test_nothing_selected_or_disabled(self, small_index: ValueIndex) -> None:
        machine = FilterStateMachine(small_index)

        assert machine.selection == (None, None, None)
        assert disabled_pairs(small_index, machine.state) == set()
        assert selected_pairs(small_index, machine.state) == set()

    def test_state_covers_every_indexed_value(self, small_index: ValueIndex) -> None:
        machine = FilterStateMachine(small_index)

        for slot, dimension in enumerate(small_index.dimensions):
            assert tuple(machine.state[slot]) == small_index.values(dimension)

    def test_sessions_are_independent(self, small_index: ValueIndex) -> None:
        """Two machines over one index do not share selection."""
        first = FilterStateMachine(small_index)
        second = FilterStateMachine(small_index)

        first.toggle("colors", "blue")

        assert second.selection == (None, None, None)
        assert not second.state_of("sizes", "10").disabled


# =============================================================================
# TOGGLE
# =============================================================================


class TestToggle:
    def test_select_red_disables_nothing(self, small_index: ValueIndex) -> None:
        """Red co-occurs with every size and width in the small catalog."""
        machine = FilterStateMachine(small_index)

        machine.toggle("colors", "red")

        assert machine.selected_value("colors") == "red"
        assert machine.state_of("colors", "red") == ValueState(selected=True, disabled=False)
        assert disabled_pairs(small_index, machine.state) == set()

    def test_select_blue_disables_incompatible_values(self, small_index: ValueIndex) -> None:
        """Blue only pairs with size 9 and standard width."""
        machine = FilterStateMachine(small_index)

        machine.toggle("colors", "blue")

        assert disabled_pairs(small_index, machine.state) == {
            ("sizes", "10"),
            ("widths", "narrow"),
        }

    def test_selection_does_not_disable_own_dimension(self, small_index: ValueIndex) -> None:
        """Other values in the selected dimension stay enabled."""
        machine = FilterStateMachine(small_index)

        machine.toggle("colors", "blue")

        assert not machine.state_of("colors", "red").disabled
        assert not machine.state_of("colors", "red").selected

    def test_switching_value_in_same_dimension(self, small_index: ValueIndex) -> None:
        """Selecting another value replaces the previous one."""
        machine = FilterStateMachine(small_index)

        machine.toggle("colors", "blue")
        machine.toggle("colors", "red")

        assert machine.selected_value("colors") == "red"
        assert not machine.state_of("colors", "blue").selected
        assert disabled_pairs(small_index, machine.state) == set()

    def test_retoggle_clears_selection(self, small_index: ValueIndex) -> None:
        machine = FilterStateMachine(small_index)

        machine.toggle("colors", "blue")
        machine.toggle("colors", "blue")

        assert machine.selected_value("colors") is None
        assert disabled_pairs(small_index, machine.state) == set()

    def test_retoggle_restores_prior_state(self, shoe_index: ValueIndex) -> None:
        """Toggling the same value twice returns to exactly the previous state."""
        machine = FilterStateMachine(shoe_index)
        machine.toggle("colors", "black")
        selection_before = machine.selection
        state_before = machine.state

        machine.toggle("widths", "wide")
        machine.toggle("widths", "wide")

        assert machine.selection == selection_before
        assert machine.state == state_before

    def test_multiple_dimensions_union(self, small_index: ValueIndex) -> None:
        """Red plus size 10 disables blue (via size) and narrow (via size)."""
        machine = FilterStateMachine(small_index)

        machine.toggle("colors", "red")
        machine.toggle("sizes", "10")

        assert machine.active_selection() == {"colors": "red", "sizes": "10", "widths": None}
        assert disabled_pairs(small_index, machine.state) == {
            ("colors", "blue"),
            ("widths", "narrow"),
        }

    def test_enum_dimension_accepted(self, small_index: ValueIndex) -> None:
        machine = FilterStateMachine(small_index)

        machine.toggle(ShoeDimension.COLORS, "blue")

        assert machine.selected_value("colors") == "blue"


# =============================================================================
# DISABLED AND UNKNOWN VALUES
# =============================================================================


class TestRejectedToggles:
    def test_disabled_toggle_is_noop(self, small_index: ValueIndex) -> None:
        """Size 10 is disabled while blue is selected; clicking it does nothing."""
        machine = FilterStateMachine(small_index)
        machine.toggle("colors", "blue")
        selection_before = machine.selection
        state_before = machine.state

        machine.toggle("sizes", "10")

        assert machine.selection == selection_before
        assert machine.state == state_before

    def test_disabled_value_in_selected_dimension_partner(self, small_index: ValueIndex) -> None:
        """With red and size 10 active, blue cannot be chosen."""
        machine = FilterStateMachine(small_index)
        machine.toggle("colors", "red")
        machine.toggle("sizes", "10")

        machine.toggle("colors", "blue")

        assert machine.selected_value("colors") == "red"

    def test_unknown_value_raises(self, small_index: ValueIndex) -> None:
        machine = FilterStateMachine(small_index)
        machine.toggle("colors", "blue")
        selection_before = machine.selection
        state_before = machine.state

        with pytest.raises(UnknownValueError):
            machine.toggle("colors", "green")

        assert machine.selection == selection_before
        assert machine.state is state_before

    def test_unknown_dimension_raises(self, small_index: ValueIndex) -> None:
        machine = FilterStateMachine(small_index)

        with pytest.raises(UnknownValueError):
            machine.toggle("materials", "leather")

        assert machine.selection == (None, None, None)

    def test_state_of_unknown_value_raises(self, small_index: ValueIndex) -> None:
        machine = FilterStateMachine(small_index)

        with pytest.raises(UnknownValueError):
            machine.state_of("widths", "extra-wide")


# =============================================================================
# RESET
# =============================================================================


class TestReset:
    def test_clearing_each_selection_resets_everything(self, shoe_index: ValueIndex) -> None:
        machine = FilterStateMachine(shoe_index)
        machine.toggle("colors", "black")
        machine.toggle("sizes", "10")

        machine.toggle("sizes", "10")
        machine.toggle("colors", "black")

        assert machine.selection == (None, None, None)
        assert disabled_pairs(shoe_index, machine.state) == set()
        assert selected_pairs(shoe_index, machine.state) == set()

    def test_clear(self, shoe_index: ValueIndex) -> None:
        machine = FilterStateMachine(shoe_index)
        initial = machine.state
        machine.toggle("colors", "grey")

        machine.clear()

        assert machine.selection == (None, None, None)
        assert machine.state == initial


# =============================================================================
# PROPERTIES OVER THE SHOE CATALOG
# =============================================================================


class TestProperties:
    def test_selected_value_never_disabled(self, shoe_index: ValueIndex) -> None:
        """Whatever is selected first, it ends up selected and enabled."""
        for dimension in shoe_index.dimensions:
            for value in shoe_index.values(dimension):
                machine = FilterStateMachine(shoe_index)

                machine.toggle(dimension, value)

                assert machine.state_of(dimension, value) == ValueState(
                    selected=True, disabled=False
                )

    def test_self_exemption_with_partner_selection(self, shoe_index: ValueIndex) -> None:
        """An active selection stays enabled after another dimension is chosen."""
        machine = FilterStateMachine(shoe_index)
        machine.toggle("colors", "black")

        for value in shoe_index.values("widths"):
            if not machine.state_of("widths", value).disabled:
                machine.toggle("widths", value)
                assert machine.state_of("colors", "black") == ValueState(
                    selected=True, disabled=False
                )
                assert machine.state_of("widths", value) == ValueState(
                    selected=True, disabled=False
                )
                machine.toggle("widths", value)

    def test_disabled_set_is_union_of_single_selections(self, shoe_index: ValueIndex) -> None:
        """Disablement for a combined selection equals the union of each part."""
        colors = shoe_index.values("colors")
        widths = shoe_index.values("widths")

        for color, width in itertools.product(colors, widths):
            combined = compute_state(shoe_index, (color, None, width))
            color_only = compute_state(shoe_index, (color, None, None))
            width_only = compute_state(shoe_index, (None, None, width))

            assert disabled_pairs(shoe_index, combined) == (
                disabled_pairs(shoe_index, color_only) | disabled_pairs(shoe_index, width_only)
            )

    def test_disablement_independent_of_dimension_order(self) -> None:
        """Reordering dimensions does not change which values are disabled."""
        items = [
            {"colors": "black", "sizes": "10", "widths": "wide"},
            {"colors": "red", "sizes": "9", "widths": "narrow"},
            {"colors": "red", "sizes": "10", "widths": "standard"},
        ]
        forward = build_value_index(items, ["colors", "sizes", "widths"])
        reverse = build_value_index(items, ["widths", "sizes", "colors"])

        forward_state = compute_state(forward, ("red", "10", None))
        reverse_state = compute_state(reverse, (None, "10", "red"))

        assert disabled_pairs(forward, forward_state) == disabled_pairs(reverse, reverse_state)

    def test_grey_only_pairs_with_size_12_wide(self, shoe_index: ValueIndex) -> None:
        machine = FilterStateMachine(shoe_index)

        machine.toggle("colors", "grey")

        enabled_sizes = [
            value for value in shoe_index.values("sizes")
            if not machine.state_of("sizes", value).disabled
        ]
        enabled_widths = [
            value for value in shoe_index.values("widths")
            if not machine.state_of("widths", value).disabled
        ]
        assert enabled_sizes == ["12"]
        assert enabled_widths == ["wide"]


# =============================================================================
# BUTTONS
# =============================================================================


class TestButtons:
    def test_rows_follow_dimension_order(self, small_index: ValueIndex) -> None:
        machine = FilterStateMachine(small_index)

        rows = machine.buttons()

        assert [row[0].dimension for row in rows] == ["colors", "sizes", "widths"]
        assert [button.value for button in rows[0]] == ["red", "blue"]

    def test_buttons_carry_flags(self, small_index: ValueIndex) -> None:
        machine = FilterStateMachine(small_index)
        machine.toggle("colors", "blue")

        rows = machine.buttons()
        flags = {
            (button.dimension, button.value): (button.selected, button.disabled)
            for row in rows
            for button in row
        }

        assert flags == {
            ("colors", "red"): (False, False),
            ("colors", "blue"): (True, False),
            ("sizes", "9"): (False, False),
            ("sizes", "10"): (False, True),
            ("widths", "narrow"): (False, True),
            ("widths", "standard"): (False, False),
        }
