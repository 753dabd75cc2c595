from __future__ import annotations

from ..lib.fs import touch
from ..pipeline import InstallCtx


class MarkCacheValidStep:
    step_id = "80_mark_cache_valid"

    def run(self, ctx: InstallCtx) -> None:
        touch(ctx.cfg.cache_marker_path, dry_run=ctx.dry_run)
