from __future__ import annotations

from ..lib.fs import remove_tree
from ..pipeline import InstallCtx


class CleanupTmpStep:
    step_id = "20_cleanup_tmp"

    def run(self, ctx: InstallCtx) -> None:
        # Leftovers from an aborted attempt.
        remove_tree(ctx.cfg.tmp_path, dry_run=ctx.dry_run)
