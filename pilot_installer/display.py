"""Rendering boundary between the installer core and a screen.

The core only ever hands a Display plain data: the variant list with the
highlighted index, a percentage, or a request for the finishing screen. Real
front-ends (see ``ui/terminal.py``) own their window/terminal state and are
used as context managers so that state lives exactly as long as one run.
"""

from __future__ import annotations

import logging
from typing import Protocol, Sequence

from .lib.variants import Variant

logger = logging.getLogger(__name__)


class Display(Protocol):
    def show_variants(self, variants: Sequence[Variant], highlighted: int) -> None:
        ...

    def show_progress(self, percent: int) -> None:
        ...

    def show_finishing(self) -> None:
        ...


class LogDisplay:
    """Headless display that records what would be drawn in the log."""

    def __init__(self) -> None:
        self.last_percent: int | None = None

    def __enter__(self) -> "LogDisplay":
        return self

    def __exit__(self, *exc: object) -> None:
        return None

    def show_variants(self, variants: Sequence[Variant], highlighted: int) -> None:
        logger.info("Variant %d/%d highlighted: %s", highlighted + 1, len(variants), variants[highlighted].name)

    def show_progress(self, percent: int) -> None:
        percent = max(0, min(percent, 100))
        if percent != self.last_percent:
            logger.info("Installing... %d%%", percent)
        self.last_percent = percent

    def show_finishing(self) -> None:
        logger.info("Finishing install...")
