from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .lib.variants import DEFAULT_REPO_URL_TEMPLATE, DEFAULT_VARIANT

# https://github.com/commaci2.keys
_CI_SSH_KEYS = "ssh-ed25519 AAAAC3NzaC1lZDI1NTE5AAAAIMX2kU8eBZyEWmbq0tjMPxksWWVuIV/5l64GabcYbdpI"


def _default_params() -> Dict[str, str]:
    return {
        "SshEnabled": "1",
        "RecordFrontLock": "1",
        "GithubSshKeys": _CI_SSH_KEYS,
    }


@dataclass(frozen=True)
class InstallConfig:
    source_url: str = DEFAULT_VARIANT.source_url
    branch: str = "release3"
    variant_list_url: str = "https://gist.githubusercontent.com/ChosenCypher/6f34c27ea47ce2b52d20813fa8d1784a/raw"
    install_path: str = "/data/openpilot"
    tmp_path: str = "/data/tmppilot"
    cache_marker_path: str = "/data/.openpilot_cache"
    continue_marker_path: str = "/data/continue.sh"

    # Extra setup for internal/CI devices.
    extended_provisioning: bool = False
    params_dir: str = "/data/params/d"
    params: Dict[str, str] = field(default_factory=_default_params)
    ssh_push_url: str = "git@github.com:commaai/openpilot.git"

    repo_url_template: str = DEFAULT_REPO_URL_TEMPLATE
    clock_poll_s: float = 0.5
    handoff_wait_s: float = 60.0

    state_path: str = "/data/installer_state.json"
    log_path: str = "/data/log/installer.log"
    dry_run: bool = False

    def with_overrides(self, overrides: Mapping[str, Any]) -> "InstallConfig":
        """Return a copy with non-None ``overrides`` applied."""
        values = {k: v for k, v in overrides.items() if v is not None}
        _check_keys(values)
        return dataclasses.replace(self, **values)


_FIELDS = {f.name for f in dataclasses.fields(InstallConfig)}


def _check_keys(raw: Mapping[str, Any]) -> None:
    unknown = sorted(set(raw) - _FIELDS)
    if unknown:
        raise ValueError(f"Unknown install config key(s): {', '.join(unknown)}")


def _read_raw(p: Path) -> Dict[str, Any]:
    ext = p.suffix.lower()
    if ext in {".yaml", ".yml"}:
        try:
            import yaml  # type: ignore
        except Exception as e:  # pragma: no cover
            raise RuntimeError("PyYAML is required to read YAML install config") from e
        data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    else:
        data = json.loads(p.read_text(encoding="utf-8"))

    if not isinstance(data, dict):
        raise ValueError(f"Install config must be a mapping/object: {p}")
    return data


def load_install_config(path: Optional[str] = None, **overrides: Any) -> InstallConfig:
    """Build the run's configuration: defaults, then the file, then overrides."""

    cfg = InstallConfig()
    if path:
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(path)
        raw = _read_raw(p)
        _check_keys(raw)
        if "params" in raw:
            raw["params"] = {str(k): str(v) for k, v in (raw["params"] or {}).items()}
        cfg = dataclasses.replace(cfg, **raw)

    return cfg.with_overrides(overrides)
