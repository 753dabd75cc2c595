"""
Shared test fixtures and configuration.
"""

from pathlib import Path
from typing import List, Sequence, Tuple

import pytest

from pilot_installer.install_config import InstallConfig
from pilot_installer.lib.variants import Variant


class RecordingDisplay:
    """Display double that remembers every frame it was asked to draw."""

    def __init__(self) -> None:
        self.frames: List[Tuple[str, object]] = []

    def show_variants(self, variants: Sequence[Variant], highlighted: int) -> None:
        self.frames.append(("variants", highlighted))

    def show_progress(self, percent: int) -> None:
        self.frames.append(("progress", percent))

    def show_finishing(self) -> None:
        self.frames.append(("finishing", None))

    @property
    def percents(self) -> List[int]:
        return [v for kind, v in self.frames if kind == "progress"]


@pytest.fixture
def display() -> RecordingDisplay:
    return RecordingDisplay()


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Stand-in for the device's /data partition."""
    d = tmp_path / "data"
    d.mkdir()
    return d


@pytest.fixture
def cfg(data_dir: Path) -> InstallConfig:
    return InstallConfig(
        source_url="https://github.com/commaai/openpilot.git",
        branch="release3",
        variant_list_url="https://example.invalid/forks.json",
        install_path=str(data_dir / "openpilot"),
        tmp_path=str(data_dir / "tmppilot"),
        cache_marker_path=str(data_dir / ".openpilot_cache"),
        continue_marker_path=str(data_dir / "continue.sh"),
        params_dir=str(data_dir / "params" / "d"),
        state_path=str(data_dir / "installer_state.json"),
        log_path=str(data_dir / "installer.log"),
        clock_poll_s=0.0,
        handoff_wait_s=0.0,
    )
