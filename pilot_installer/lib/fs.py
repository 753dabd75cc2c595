from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def copy_tree(src: str, dst: str, *, dry_run: bool = False) -> None:
    """Copy a directory tree, keeping symlinks and file modes (``cp -rp``)."""
    s = Path(src)
    d = Path(dst)
    if not s.exists():
        raise FileNotFoundError(src)

    if dry_run:
        logger.info("Would copy tree %s -> %s", str(s), str(d))
        return

    logger.info("Copy tree %s -> %s", str(s), str(d))
    shutil.copytree(s, d, symlinks=True, copy_function=shutil.copy2)


def remove_tree(path: str, *, dry_run: bool = False) -> None:
    """``rm -rf``: a missing path is not an error."""
    p = Path(path)
    if dry_run:
        logger.info("Would remove %s", str(p))
        return
    if p.is_symlink() or p.is_file():
        p.unlink()
    elif p.exists():
        shutil.rmtree(p)
    else:
        return
    logger.info("Removed %s", str(p))


def remove_file(path: str, *, dry_run: bool = False) -> None:
    """``rm -f``."""
    p = Path(path)
    if dry_run:
        logger.info("Would remove %s", str(p))
        return
    try:
        p.unlink()
    except FileNotFoundError:
        return
    logger.info("Removed %s", str(p))


def move_into_place(src: str, dst: str, *, dry_run: bool = False) -> None:
    """Rename ``src`` to ``dst``. Both must be on the same filesystem."""
    if dry_run:
        logger.info("Would move %s -> %s", src, dst)
        return
    os.rename(src, dst)
    logger.info("Moved %s -> %s", src, dst)


def touch(path: str, *, dry_run: bool = False) -> None:
    p = Path(path)
    if dry_run:
        logger.info("Would create %s", str(p))
        return
    p.parent.mkdir(parents=True, exist_ok=True)
    p.touch()


def _write_staged(staging: Path, data: bytes, mode: int) -> None:
    with open(staging, "wb") as f:
        f.write(data)
        f.flush()
        os.fsync(f.fileno())
    os.chmod(staging, mode)


def atomic_write_bytes(path: str, data: bytes, *, mode: int = 0o644, dry_run: bool = False) -> None:
    """Write ``path`` so readers see either the old file or the complete new one.

    Data goes to ``<path>.new`` first, gets its mode, then replaces ``path``.
    """

    p = Path(path)
    staging = p.with_name(p.name + ".new")
    if dry_run:
        logger.info("Would write %d bytes to %s", len(data), str(p))
        return

    p.parent.mkdir(parents=True, exist_ok=True)
    _write_staged(staging, data, mode)
    os.replace(staging, p)
    logger.info("Wrote %s (%d bytes)", str(p), len(data))
