from __future__ import annotations

import logging
from pathlib import Path

from ..lib.command import run_cmd
from ..lib.fs import atomic_write_bytes
from ..pipeline import InstallCtx

logger = logging.getLogger(__name__)

ALL_BRANCHES_REFSPEC = "+refs/heads/*:refs/remotes/origin/*"


class ProvisionStep:
    """Device params and an ssh push remote for development devices."""

    step_id = "60_provision"

    def run(self, ctx: InstallCtx) -> None:
        cfg = ctx.cfg
        if not cfg.extended_provisioning:
            logger.info("Extended provisioning disabled; skipping")
            return

        params_dir = Path(cfg.params_dir)
        for key, value in sorted(cfg.params.items()):
            atomic_write_bytes(str(params_dir / key), value.encode("utf-8"), dry_run=ctx.dry_run)

        run_cmd(["git", "remote", "set-url", "origin", "--push", cfg.ssh_push_url],
                cwd=cfg.install_path, dry_run=ctx.dry_run)
        run_cmd(["git", "config", "--replace-all", "remote.origin.fetch", ALL_BRANCHES_REFSPEC],
                cwd=cfg.install_path, dry_run=ctx.dry_run)
