from __future__ import annotations

import logging

from ..lib.clock import system_time_valid, wait_for_valid_time
from ..pipeline import InstallCtx, Phase
from ..state_store import set_phase

logger = logging.getLogger(__name__)


class WaitForClockStep:
    step_id = "10_wait_for_clock"

    def run(self, ctx: InstallCtx) -> None:
        set_phase(ctx.state, Phase.WAITING_FOR_CLOCK.value)
        # git over https needs a sane clock for certificate checks.
        waits = wait_for_valid_time(poll_s=ctx.cfg.clock_poll_s, is_valid=system_time_valid, sleep=ctx.sleep)
        if waits:
            logger.info("Clock valid after %d wait(s)", waits)
