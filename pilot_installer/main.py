from __future__ import annotations

import argparse
import dataclasses
import logging
import os
import time
from typing import Any, Callable, Dict, Iterable, Optional

from .display import Display, LogDisplay
from .install_config import InstallConfig, load_install_config
from .lib.net import fetch_variant_list
from .lib.selection import InputEvent, select_variant
from .lib.variants import DEFAULT_VARIANT, Variant
from .logging_utils import configure_logging
from .pipeline import InstallCtx, InstallOutcome, Phase, run_pipeline
from .state_store import ensure_defaults, save_state, set_phase
from .steps import (
    CheckoutStep,
    CleanupTmpStep,
    HandoffStep,
    MarkCacheValidStep,
    PinBranchStep,
    ProvisionStep,
    SwapInstallStep,
    WaitForClockStep,
    WriteContinueStep,
    finish_install,
)

logger = logging.getLogger(__name__)


def build_steps():
    return [
        WaitForClockStep(),
        CleanupTmpStep(),
        CheckoutStep(),
        PinBranchStep(),
        SwapInstallStep(),
        ProvisionStep(),
        WriteContinueStep(),
        MarkCacheValidStep(),
        HandoffStep(),
    ]


def run(
    cfg: InstallConfig,
    *,
    display: Display,
    events: Iterable[InputEvent] = (),
    sleep: Callable[[float], None] = time.sleep,
) -> InstallOutcome:
    """Run one installer pass, recording what happened in ``cfg.state_path``."""

    if os.path.exists(cfg.continue_marker_path):
        logger.info("%s exists; install already complete", cfg.continue_marker_path)
        finish_install(display, sleep, cfg.handoff_wait_s)
        return InstallOutcome(succeeded=True, exit_status=0)

    state = ensure_defaults({})
    default = Variant(DEFAULT_VARIANT.name, cfg.source_url)
    variants = fetch_variant_list(cfg.variant_list_url, default=default, repo_url_template=cfg.repo_url_template)
    chosen = variants[select_variant(variants, display, events)]
    cfg = dataclasses.replace(cfg, source_url=chosen.source_url)
    state["variant"] = {"name": chosen.name, "source_url": chosen.source_url, "branch": cfg.branch}
    logger.info("Installing %s (%s) branch %s", chosen.name, chosen.source_url, cfg.branch)

    display.show_progress(0)
    ctx = InstallCtx(cfg=cfg, display=display, state=state, sleep=sleep)

    try:
        result = run_pipeline(ctx=ctx, steps=build_steps())
        state["execution"]["ran_steps"] = result.ran_steps
        return result.outcome
    except Exception as e:
        logger.exception("Installer failed")
        set_phase(state, Phase.FAILED.value)
        state["execution"]["errors"].append(
            {
                "step": state["execution"].get("current_step"),
                "error": str(e),
            }
        )
        raise
    finally:
        save_state(cfg.state_path, state)


def _overrides_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    return {
        "source_url": args.source_url,
        "branch": args.branch,
        "variant_list_url": args.variant_list_url,
        "install_path": args.install_path,
        "tmp_path": args.tmp_path,
        "state_path": args.state,
        "log_path": args.log,
        "extended_provisioning": True if args.extended_provisioning else None,
        "dry_run": True if args.dry_run else None,
    }


def build_parser(prog: str = "pilot-installer") -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog=prog)
    p.add_argument("--config", default=None, help="Install config (json|yaml)")
    p.add_argument("--source-url", default=None, help="Repository to install when no variant is picked")
    p.add_argument("--branch", default=None, help="Branch to check out")
    p.add_argument("--variant-list-url", default=None, help="Where to fetch the list of installable variants")
    p.add_argument("--install-path", default=None)
    p.add_argument("--tmp-path", default=None)
    p.add_argument("--state", default=None, help="Path to the run record (json|yaml)")
    p.add_argument("--log", default=None, help="Path to installer log")
    p.add_argument("--extended-provisioning", action="store_true", help="Write device params and ssh push remote")
    p.add_argument("--dry-run", action="store_true", help="Log commands without running them")
    return p


def load_config_from_args(args: argparse.Namespace) -> InstallConfig:
    return load_install_config(args.config, **_overrides_from_args(args))


def main(argv: Optional[list[str]] = None) -> int:
    """Headless entry point: progress goes to the log, the default variant is installed."""

    args = build_parser().parse_args(argv)
    cfg = load_config_from_args(args)
    configure_logging(log_path=cfg.log_path, fallback_dir=os.path.dirname(cfg.tmp_path))

    with LogDisplay() as display:
        run(cfg, display=display)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
