from __future__ import annotations

import logging
import os
import shlex
import subprocess
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int
    stdout: str
    stderr: str


def _fmt_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def _text_io(cwd: str | None, env: Mapping[str, str] | None) -> Dict[str, Any]:
    # git and servers print raw bytes (file names, remote: messages); never fail on them.
    return {
        "encoding": "utf-8",
        "errors": "replace",
        "cwd": cwd,
        "env": dict(os.environ, **(env or {})),
    }


def run_cmd(
    argv: Sequence[str],
    *,
    check: bool = True,
    env: Mapping[str, str] | None = None,
    cwd: str | None = None,
    input_text: str | None = None,
    dry_run: bool = False,
) -> CmdResult:
    """Run a command to completion and capture its output.

    The command line is logged first; with ``dry_run`` nothing else happens.
    A non-zero exit raises ``RuntimeError`` carrying stderr unless
    ``check=False``. Undecodable output bytes become U+FFFD.
    """

    argv_list = list(argv)
    logger.info("CMD %s", _fmt_argv(argv_list))

    if dry_run:
        return CmdResult(argv=argv_list, returncode=0, stdout="", stderr="")

    p = subprocess.run(
        argv_list,
        input=input_text,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        **_text_io(cwd, env),
    )
    result = CmdResult(argv=argv_list, returncode=p.returncode, stdout=p.stdout, stderr=p.stderr)

    for name, text in (("STDOUT", result.stdout), ("STDERR", result.stderr)):
        if text:
            logger.debug("%s %s", name, text.strip())

    if check and result.returncode != 0:
        raise RuntimeError(f"Command failed ({result.returncode}): {_fmt_argv(argv_list)}\n{result.stderr}")
    return result


def stream_cmd(
    argv: Sequence[str],
    *,
    on_line: Callable[[str], None],
    env: Mapping[str, str] | None = None,
    cwd: str | None = None,
    dry_run: bool = False,
) -> int:
    """Run a command, handing each line of merged stdout/stderr to ``on_line``.

    Blocks until the output stream closes, then waits for the exit status and
    returns it. Text mode translates ``\\r`` to ``\\n``, so carriage-return
    progress updates arrive as separate lines. The child is always reaped,
    even when ``on_line`` raises.
    """

    argv_list = list(argv)
    logger.info("CMD %s", _fmt_argv(argv_list))

    if dry_run:
        return 0

    with subprocess.Popen(
        argv_list,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        **_text_io(cwd, env),
    ) as p:
        assert p.stdout is not None
        for line in p.stdout:
            line = line.rstrip("\n")
            if not line:
                continue
            logger.debug("OUT %s", line)
            on_line(line)
        returncode = p.wait()

    logger.info("Exit %s: %s", returncode, _fmt_argv(argv_list))
    return returncode
