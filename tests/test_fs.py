"""
Tests for filesystem helpers: tree copy/removal and atomic writes.
"""

import os
import stat
from pathlib import Path

import pytest

from pilot_installer.lib import fs


class TestAtomicWrite:
    def test_writes_with_mode(self, tmp_path: Path):
        target = tmp_path / "continue.sh"
        fs.atomic_write_bytes(str(target), b"#!/bin/sh\n", mode=0o755)
        assert target.read_bytes() == b"#!/bin/sh\n"
        assert stat.S_IMODE(target.stat().st_mode) == 0o755
        assert not (tmp_path / "continue.sh.new").exists()

    def test_interrupted_before_rename_keeps_old_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        target = tmp_path / "continue.sh"
        target.write_bytes(b"old")

        def crash(src, dst):
            raise KeyboardInterrupt("power loss")

        monkeypatch.setattr(fs.os, "replace", crash)
        with pytest.raises(KeyboardInterrupt):
            fs.atomic_write_bytes(str(target), b"new contents", mode=0o755)

        assert target.read_bytes() == b"old"
        # Whatever was staged is complete, never a prefix.
        assert (tmp_path / "continue.sh.new").read_bytes() == b"new contents"

    def test_interrupted_mid_write_never_touches_target(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        target = tmp_path / "continue.sh"

        def partial(staging, data, mode):
            Path(staging).write_bytes(data[:3])
            raise OSError("disk full")

        monkeypatch.setattr(fs, "_write_staged", partial)
        with pytest.raises(OSError):
            fs.atomic_write_bytes(str(target), b"new contents")
        assert not target.exists()

    def test_dry_run(self, tmp_path: Path):
        target = tmp_path / "x"
        fs.atomic_write_bytes(str(target), b"x", dry_run=True)
        assert not target.exists()


class TestTrees:
    def test_copy_tree_keeps_symlinks_and_modes(self, tmp_path: Path):
        src = tmp_path / "src"
        (src / ".git").mkdir(parents=True)
        (src / ".git" / "HEAD").write_text("ref: refs/heads/release3\n")
        script = src / "launch.sh"
        script.write_text("#!/bin/sh\n")
        script.chmod(0o755)
        os.symlink("launch.sh", src / "link.sh")

        dst = tmp_path / "dst"
        fs.copy_tree(str(src), str(dst))
        assert (dst / ".git" / "HEAD").read_text() == "ref: refs/heads/release3\n"
        assert stat.S_IMODE((dst / "launch.sh").stat().st_mode) == 0o755
        assert (dst / "link.sh").is_symlink()

    def test_copy_missing_source(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            fs.copy_tree(str(tmp_path / "nope"), str(tmp_path / "dst"))

    def test_remove_tree_and_file_tolerate_missing(self, tmp_path: Path):
        fs.remove_tree(str(tmp_path / "nope"))
        fs.remove_file(str(tmp_path / "nope"))

    def test_remove_tree(self, tmp_path: Path):
        d = tmp_path / "d"
        (d / "sub").mkdir(parents=True)
        (d / "sub" / "f").write_text("x")
        fs.remove_tree(str(d))
        assert not d.exists()

    def test_move_and_touch(self, tmp_path: Path):
        (tmp_path / "a").mkdir()
        fs.move_into_place(str(tmp_path / "a"), str(tmp_path / "b"))
        assert (tmp_path / "b").is_dir()
        fs.touch(str(tmp_path / "m" / "marker"))
        assert (tmp_path / "m" / "marker").exists()
