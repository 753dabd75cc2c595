"""Run record written after every installer run, successful or not."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)


def _detect_format(path: Path) -> str:
    ext = path.suffix.lower().lstrip(".")
    if ext in {"json", "yaml", "yml"}:
        return ext
    # Default to JSON for unknown extensions.
    return "json"


def save_state(path: str, state: Dict[str, Any]) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    if _detect_format(p) == "json":
        p.write_text(json.dumps(state, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    else:
        try:
            import yaml  # type: ignore
        except Exception as e:  # pragma: no cover
            raise RuntimeError("YAML run record requested but PyYAML is not available.") from e
        p.write_text(yaml.safe_dump(state, sort_keys=False) + "\n", encoding="utf-8")


def ensure_defaults(state: Dict[str, Any]) -> Dict[str, Any]:
    """Fill required keys with sane defaults (without overriding existing values)."""

    state.setdefault("variant", None)
    exe = state.setdefault("execution", {})
    exe.setdefault("phase", None)
    exe.setdefault("checkout", None)
    exe.setdefault("current_step", None)
    exe.setdefault("completed_steps", [])
    exe.setdefault("exit_status", None)
    exe.setdefault("errors", [])
    return state


def set_phase(state: Dict[str, Any], phase: str) -> None:
    exe = state.setdefault("execution", {})
    if exe.get("phase") != phase:
        logger.info("Phase %s -> %s", exe.get("phase"), phase)
    exe["phase"] = phase


def mark_step_completed(state: Dict[str, Any], step_id: str) -> None:
    completed = state.setdefault("execution", {}).setdefault("completed_steps", [])
    if step_id not in completed:
        completed.append(step_id)
