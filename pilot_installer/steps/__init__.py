from .step_10_wait_for_clock import WaitForClockStep
from .step_20_cleanup_tmp import CleanupTmpStep
from .step_30_checkout import CheckoutStep
from .step_40_pin_branch import PinBranchStep
from .step_50_swap_install import SwapInstallStep
from .step_60_provision import ProvisionStep
from .step_70_write_continue import WriteContinueStep
from .step_80_mark_cache_valid import MarkCacheValidStep
from .step_90_handoff import HandoffStep, finish_install

__all__ = [
    "WaitForClockStep",
    "CleanupTmpStep",
    "CheckoutStep",
    "PinBranchStep",
    "SwapInstallStep",
    "ProvisionStep",
    "WriteContinueStep",
    "MarkCacheValidStep",
    "HandoffStep",
    "finish_install",
]
