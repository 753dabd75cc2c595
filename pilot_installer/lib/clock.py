from __future__ import annotations

import datetime as dt
import logging
import time
from typing import Callable

logger = logging.getLogger(__name__)

# Anything before this means the RTC was never set (no NTP yet).
MIN_VALID_DATE = dt.date(2024, 1, 1)


def system_time_valid(now: Callable[[], dt.datetime] = dt.datetime.now) -> bool:
    return now().date() >= MIN_VALID_DATE


def wait_for_valid_time(
    *,
    poll_s: float = 0.5,
    is_valid: Callable[[], bool] = system_time_valid,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """Block until the clock is valid. No upper bound. Returns the number of waits."""

    waits = 0
    while not is_valid():
        sleep(poll_s)
        waits += 1
        logger.info("Waiting for valid time (%d)", waits)
    return waits
