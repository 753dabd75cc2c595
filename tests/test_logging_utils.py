"""
Tests for log file selection.
"""

import logging

import pytest

from pilot_installer.logging_utils import FALLBACK_LOG_NAME, configure_logging


@pytest.fixture
def fresh_root(monkeypatch):
    root = logging.getLogger()
    before = list(root.handlers)
    monkeypatch.setattr(root, "_pilot_installer_log_path", None, raising=False)
    monkeypatch.setattr(root, "level", root.level)
    yield root
    for h in root.handlers[:]:
        if h not in before:
            root.removeHandler(h)
            h.close()


class TestConfigureLogging:
    def test_requested_path_used(self, fresh_root, tmp_path):
        log_path = tmp_path / "log" / "installer.log"
        assert configure_logging(log_path=str(log_path), also_console=False) == str(log_path)
        assert log_path.exists()

    def test_falls_back_next_to_install(self, fresh_root, tmp_path):
        blocker = tmp_path / "log"
        blocker.write_text("not a directory")
        data_dir = tmp_path / "data"
        data_dir.mkdir()

        chosen = configure_logging(
            log_path=str(blocker / "installer.log"), also_console=False, fallback_dir=str(data_dir)
        )
        assert chosen == str(data_dir / FALLBACK_LOG_NAME)

    def test_second_call_keeps_first_path(self, fresh_root, tmp_path):
        first = configure_logging(log_path=str(tmp_path / "a.log"), also_console=False)
        assert configure_logging(log_path=str(tmp_path / "b.log"), also_console=False) == first
        assert not (tmp_path / "b.log").exists()
