"""
Tests for variant selection: state transitions and the event loop.
"""

import pytest

from pilot_installer.lib.selection import InputEvent, SelectionState, select_variant
from pilot_installer.lib.variants import DEFAULT_VARIANT, Variant

UP, DOWN, CONFIRM, CANCEL = InputEvent.UP, InputEvent.DOWN, InputEvent.CONFIRM, InputEvent.CANCEL

THREE = (
    DEFAULT_VARIANT,
    Variant("alice", "https://example.com/alice.git"),
    Variant("bob", "https://example.com/bob.git"),
)


class TestSelectionState:
    def test_move_down_wraps(self):
        s = SelectionState(THREE)
        s = s.move_down()
        assert s.highlighted == 1
        s = s.move_down()
        assert s.highlighted == 2
        s = s.move_down()
        assert s.highlighted == 0

    def test_move_up_wraps(self):
        assert SelectionState(THREE).move_up().highlighted == 2

    def test_invalid_index(self):
        with pytest.raises(ValueError):
            SelectionState(THREE, highlighted=3)

    def test_empty(self):
        with pytest.raises(ValueError):
            SelectionState(())


class TestSelectVariant:
    def test_confirm_returns_highlighted(self, display):
        assert select_variant(THREE, display, [DOWN, DOWN, CONFIRM]) == 2

    def test_confirm_immediately(self, display):
        assert select_variant(THREE, display, [CONFIRM]) == 0

    def test_wraparound_then_confirm(self, display):
        assert select_variant(THREE, display, [DOWN, DOWN, DOWN, CONFIRM]) == 0
        assert select_variant(THREE, display, [UP, CONFIRM]) == 2

    def test_cancel_returns_default(self, display):
        assert select_variant(THREE, display, [DOWN, CANCEL]) == 0
        assert select_variant(THREE, display, [UP, UP, CANCEL]) == 0

    def test_input_closed_returns_default(self, display):
        assert select_variant(THREE, display, [DOWN]) == 0

    def test_redraws_after_each_move(self, display):
        select_variant(THREE, display, [DOWN, DOWN, UP, CONFIRM])
        assert display.frames == [
            ("variants", 0),
            ("variants", 1),
            ("variants", 2),
            ("variants", 1),
        ]

    def test_single_variant_consumes_no_input(self, display):
        def events():
            raise AssertionError("input must not be read")
            yield  # pragma: no cover

        assert select_variant([DEFAULT_VARIANT], display, events()) == 0
        assert display.frames == []
