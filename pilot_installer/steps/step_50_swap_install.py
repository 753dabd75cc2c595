from __future__ import annotations

import logging

from ..lib.fs import move_into_place, remove_file, remove_tree
from ..pipeline import InstallCtx

logger = logging.getLogger(__name__)


class SwapInstallStep:
    step_id = "50_swap_install"

    def run(self, ctx: InstallCtx) -> None:
        cfg = ctx.cfg
        # The marker must be gone before the directory it vouches for is touched.
        remove_file(cfg.cache_marker_path, dry_run=ctx.dry_run)
        remove_tree(cfg.install_path, dry_run=ctx.dry_run)
        move_into_place(cfg.tmp_path, cfg.install_path, dry_run=ctx.dry_run)
        logger.info("Installed %s", cfg.install_path)
