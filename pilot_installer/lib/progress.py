from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

_PERCENT_RE = re.compile(r"(\d+)%")


@dataclass(frozen=True)
class ProgressStage:
    token: str
    weight: int


# git clone/fetch --progress stages and their share of the bar.
GIT_STAGES: Tuple[ProgressStage, ...] = (
    ProgressStage("Receiving objects: ", 91),
    ProgressStage("Resolving deltas: ", 2),
    ProgressStage("Updating files: ", 7),
)


class ProgressTracker:
    """Turns streamed checkout output into a single 0-100 value.

    Each line is mapped on its own: the first stage whose token appears in the
    line supplies the base offset, and the figure right before the next ``%``
    scales that stage's weight. Values lower than the last reported one are
    dropped so the displayed percentage never goes backwards.
    """

    def __init__(self, stages: Sequence[ProgressStage] = GIT_STAGES) -> None:
        self.stages = tuple(stages)
        self.last_reported = 0

    def reset(self) -> None:
        self.last_reported = 0

    def percent_for(self, line: str) -> Optional[int]:
        """Stateless mapping of one line to a percentage, or None."""
        base = 0
        for stage in self.stages:
            idx = line.find(stage.token)
            if idx != -1:
                m = _PERCENT_RE.search(line, idx + len(stage.token))
                if m is None:
                    return None
                local = min(int(m.group(1)), 100)
                return base + local * stage.weight // 100
            base += stage.weight
        return None

    def report(self, percent: int) -> Optional[int]:
        percent = max(0, min(percent, 100))
        if percent < self.last_reported:
            return None
        self.last_reported = percent
        return percent

    def on_line(self, line: str) -> Optional[int]:
        percent = self.percent_for(line)
        if percent is None:
            return None
        return self.report(percent)

    def finish(self) -> int:
        self.last_reported = 100
        return 100
