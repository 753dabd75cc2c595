from __future__ import annotations

import logging
from typing import Callable

from ..display import Display
from ..pipeline import InstallCtx, Phase
from ..state_store import set_phase

logger = logging.getLogger(__name__)


def finish_install(display: Display, sleep: Callable[[float], None], wait_s: float) -> None:
    """Show the finishing screen and give the launcher time to take over."""
    display.show_finishing()
    logger.info("Waiting %.0fs for hand-off", wait_s)
    sleep(wait_s)


class HandoffStep:
    step_id = "90_handoff"

    def run(self, ctx: InstallCtx) -> None:
        set_phase(ctx.state, Phase.DONE.value)
        finish_install(ctx.display, ctx.sleep, ctx.cfg.handoff_wait_s)
