from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Protocol, Sequence

from .display import Display
from .install_config import InstallConfig
from .lib.progress import ProgressTracker
from .state_store import mark_step_completed

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    WAITING_FOR_CLOCK = "waiting_for_clock"
    FRESH_CLONE = "fresh_clone"
    CACHED_FETCH = "cached_fetch"
    FINALIZING = "finalizing"
    DONE = "done"
    FAILED = "failed"


class InstallError(RuntimeError):
    pass


class CheckoutFailed(InstallError):
    def __init__(self, exit_status: int) -> None:
        super().__init__(f"git exited with status {exit_status}")
        self.exit_status = exit_status


@dataclass(frozen=True)
class InstallOutcome:
    succeeded: bool
    exit_status: int


@dataclass
class InstallCtx:
    cfg: InstallConfig
    display: Display
    state: Dict[str, Any] = field(default_factory=dict)
    tracker: ProgressTracker = field(default_factory=ProgressTracker)
    sleep: Callable[[float], None] = time.sleep

    @property
    def dry_run(self) -> bool:
        return self.cfg.dry_run


class Step(Protocol):
    """A single step of the install."""

    step_id: str

    def run(self, ctx: InstallCtx) -> None:
        ...


@dataclass(frozen=True)
class PipelineResult:
    outcome: InstallOutcome
    ran_steps: List[str]


def run_pipeline(*, ctx: InstallCtx, steps: Sequence[Step]) -> PipelineResult:
    """Run every step in order. Any exception aborts the run."""

    ran: List[str] = []
    exe = ctx.state.setdefault("execution", {})

    for step in steps:
        exe["current_step"] = step.step_id
        logger.info("Running step %s", step.step_id)
        step.run(ctx)
        mark_step_completed(ctx.state, step.step_id)
        ran.append(step.step_id)

    exe["current_step"] = None
    exit_status = int(exe.get("exit_status") or 0)
    return PipelineResult(outcome=InstallOutcome(succeeded=True, exit_status=exit_status), ran_steps=ran)
