from __future__ import annotations

from ..lib.command import run_cmd
from ..pipeline import InstallCtx, Phase
from ..state_store import set_phase


class PinBranchStep:
    """Make sure the checkout is exactly origin/<branch>, submodules included."""

    step_id = "40_pin_branch"

    def run(self, ctx: InstallCtx) -> None:
        set_phase(ctx.state, Phase.FINALIZING.value)
        cfg = ctx.cfg
        for argv in (
            ["git", "checkout", cfg.branch],
            ["git", "reset", "--hard", f"origin/{cfg.branch}"],
            ["git", "submodule", "update", "--init"],
        ):
            run_cmd(argv, cwd=cfg.tmp_path, dry_run=ctx.dry_run)
