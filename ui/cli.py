from __future__ import annotations

import os
import sys

from pilot_installer.logging_utils import configure_logging
from pilot_installer.main import build_parser, load_config_from_args, run

from ui.terminal import TerminalDisplay, read_events


def main(argv: list[str] | None = None) -> int:
    # Same options and config as the headless entry point; only the display differs.
    args = build_parser().parse_args(argv)
    cfg = load_config_from_args(args)
    configure_logging(log_path=cfg.log_path, also_console=False, fallback_dir=os.path.dirname(cfg.tmp_path))

    with TerminalDisplay() as display:
        run(cfg, display=display, events=read_events(sys.stdin))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
