from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Sequence, TYPE_CHECKING

from .variants import Variant

if TYPE_CHECKING:
    from ..display import Display

logger = logging.getLogger(__name__)


class InputEvent(str, Enum):
    UP = "up"
    DOWN = "down"
    CONFIRM = "confirm"
    CANCEL = "cancel"


@dataclass(frozen=True)
class SelectionState:
    variants: tuple[Variant, ...]
    highlighted: int = 0

    def __post_init__(self) -> None:
        if not self.variants:
            raise ValueError("SelectionState needs at least one variant")
        if not 0 <= self.highlighted < len(self.variants):
            raise ValueError(f"highlighted index out of range: {self.highlighted}")

    def move_up(self) -> "SelectionState":
        n = len(self.variants)
        return replace(self, highlighted=(self.highlighted - 1 + n) % n)

    def move_down(self) -> "SelectionState":
        n = len(self.variants)
        return replace(self, highlighted=(self.highlighted + 1) % n)


def select_variant(variants: Sequence[Variant], display: "Display", events: Iterable[InputEvent]) -> int:
    """Let the user pick a variant; returns its index.

    A single-entry list returns 0 without touching ``events``. Cancel, or
    running out of input, falls back to the default (index 0).
    """

    if len(variants) <= 1:
        return 0

    state = SelectionState(tuple(variants))
    display.show_variants(state.variants, state.highlighted)

    for event in events:
        if event == InputEvent.UP:
            state = state.move_up()
        elif event == InputEvent.DOWN:
            state = state.move_down()
        elif event == InputEvent.CONFIRM:
            logger.info("Selected variant: %s (%s)", state.variants[state.highlighted].name,
                        state.variants[state.highlighted].source_url)
            return state.highlighted
        elif event == InputEvent.CANCEL:
            logger.info("Selection cancelled, using default")
            return 0
        display.show_variants(state.variants, state.highlighted)

    logger.info("Input closed before a selection was made, using default")
    return 0
