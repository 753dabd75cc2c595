from __future__ import annotations

from pathlib import Path

from ..lib.fs import atomic_write_bytes
from ..pipeline import InstallCtx

CONTINUE_SCRIPT = "continue_openpilot.sh"


def _resources_dir() -> Path:
    # pilot_installer/steps/step_70_write_continue.py -> pilot_installer/resources
    return Path(__file__).resolve().parents[1] / "resources"


def load_resource(name: str) -> bytes:
    data = (_resources_dir() / name).read_bytes()
    assert data, f"embedded resource {name} is empty"
    return data


class WriteContinueStep:
    step_id = "70_write_continue"

    def run(self, ctx: InstallCtx) -> None:
        atomic_write_bytes(
            ctx.cfg.continue_marker_path,
            load_resource(CONTINUE_SCRIPT),
            mode=0o755,
            dry_run=ctx.dry_run,
        )
