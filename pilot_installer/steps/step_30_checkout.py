from __future__ import annotations

import logging
import os
from typing import List

from ..lib.command import run_cmd, stream_cmd
from ..lib.fs import copy_tree
from ..pipeline import CheckoutFailed, InstallCtx, Phase
from ..state_store import set_phase

logger = logging.getLogger(__name__)

# Shown once the local copy is in place, before the fetch reports anything.
CACHED_COPY_PERCENT = 10


def has_valid_cache(install_path: str, cache_marker_path: str) -> bool:
    return os.path.exists(install_path) and os.path.exists(cache_marker_path)


def fresh_clone_argv(source_url: str, branch: str, dest: str) -> List[str]:
    return ["git", "clone", "--progress", source_url, "-b", branch, "--depth=1", "--recurse-submodules", dest]


def cached_fetch_argv(branch: str) -> List[str]:
    return ["git", "fetch", "--progress", "--depth=1", "origin", branch]


class CheckoutStep:
    """Fresh shallow clone, or a fetch on top of a copy of the current install."""

    step_id = "30_checkout"

    def run(self, ctx: InstallCtx) -> None:
        cfg = ctx.cfg
        exe = ctx.state.setdefault("execution", {})

        if has_valid_cache(cfg.install_path, cfg.cache_marker_path):
            set_phase(ctx.state, Phase.CACHED_FETCH.value)
            exe["checkout"] = "cached_fetch"
            exit_status = self._cached_fetch(ctx)
        else:
            set_phase(ctx.state, Phase.FRESH_CLONE.value)
            exe["checkout"] = "fresh_clone"
            exit_status = self._fresh_clone(ctx)

        exe["exit_status"] = exit_status
        logger.info("git finished with %d", exit_status)
        if exit_status != 0:
            raise CheckoutFailed(exit_status)

        ctx.display.show_progress(ctx.tracker.finish())

    def _fresh_clone(self, ctx: InstallCtx) -> int:
        cfg = ctx.cfg
        logger.info("Doing fresh clone of %s (%s)", cfg.source_url, cfg.branch)
        return self._stream_git(ctx, fresh_clone_argv(cfg.source_url, cfg.branch, cfg.tmp_path), cwd=None)

    def _cached_fetch(self, ctx: InstallCtx) -> int:
        cfg = ctx.cfg
        logger.info("Fetching with cache: %s", cfg.install_path)

        copy_tree(cfg.install_path, cfg.tmp_path, dry_run=ctx.dry_run)
        run_cmd(
            ["git", "remote", "set-branches", "--add", "origin", cfg.branch],
            cwd=cfg.tmp_path,
            dry_run=ctx.dry_run,
        )
        ctx.tracker.reset()
        ctx.tracker.report(CACHED_COPY_PERCENT)
        ctx.display.show_progress(CACHED_COPY_PERCENT)

        return self._stream_git(ctx, cached_fetch_argv(cfg.branch), cwd=cfg.tmp_path, reset=False)

    def _stream_git(self, ctx: InstallCtx, argv: List[str], *, cwd: str | None, reset: bool = True) -> int:
        if reset:
            ctx.tracker.reset()

        def on_line(line: str) -> None:
            percent = ctx.tracker.on_line(line)
            if percent is not None:
                ctx.display.show_progress(percent)

        return stream_cmd(argv, on_line=on_line, cwd=cwd, dry_run=ctx.dry_run)
