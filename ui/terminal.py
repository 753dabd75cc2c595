"""Terminal front-end: draws to a text stream and reads keys line by line."""

from __future__ import annotations

import sys
from typing import Iterator, Sequence, TextIO

from pilot_installer.lib.selection import InputEvent
from pilot_installer.lib.variants import Variant

_CLEAR = "\x1b[2J\x1b[H"
BAR_WIDTH = 40

KEYMAP = {
    "k": InputEvent.UP,
    "w": InputEvent.UP,
    "up": InputEvent.UP,
    "j": InputEvent.DOWN,
    "s": InputEvent.DOWN,
    "down": InputEvent.DOWN,
    "": InputEvent.CONFIRM,
    "enter": InputEvent.CONFIRM,
    "q": InputEvent.CANCEL,
    "esc": InputEvent.CANCEL,
}


def read_events(stream: TextIO) -> Iterator[InputEvent]:
    """Yield one event per recognised line until EOF. Unknown input is ignored."""
    for line in stream:
        event = KEYMAP.get(line.strip().lower())
        if event is not None:
            yield event


class TerminalDisplay:
    def __init__(self, out: TextIO | None = None, *, clear: bool = True) -> None:
        self.out = out if out is not None else sys.stdout
        self.clear = clear

    def __enter__(self) -> "TerminalDisplay":
        return self

    def __exit__(self, *exc: object) -> None:
        self.out.write("\n")
        self.out.flush()

    def _frame(self, text: str) -> None:
        if self.clear:
            self.out.write(_CLEAR)
        self.out.write(text)
        self.out.flush()

    def show_variants(self, variants: Sequence[Variant], highlighted: int) -> None:
        lines = ["Select openpilot Fork", ""]
        for i, v in enumerate(variants):
            mark = ">" if i == highlighted else " "
            lines.append(f"{mark} {v.name}")
            lines.append(f"    {v.source_url}")
        lines.append("")
        lines.append("k/j to move, Enter to confirm, q to use default")
        self._frame("\n".join(lines) + "\n")

    def show_progress(self, percent: int) -> None:
        percent = max(0, min(percent, 100))
        filled = BAR_WIDTH * percent // 100
        bar = "#" * filled + "-" * (BAR_WIDTH - filled)
        self._frame(f"Installing...\n[{bar}] {percent}%\n")

    def show_finishing(self) -> None:
        self._frame("Finishing install...\n")
