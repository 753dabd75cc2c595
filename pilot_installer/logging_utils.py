from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

DEFAULT_LOG_PATH = "/data/log/installer.log"
FALLBACK_LOG_NAME = "pilot-installer.log"


def _open_log(path: str) -> logging.FileHandler:
    Path(os.path.dirname(path) or ".").mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(path)


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    also_console: bool = True,
    fallback_dir: Optional[str] = None,
) -> str:
    """Send installer logs to ``log_path`` (and optionally the console).

    The log directory usually lives on /data next to the install. When it
    cannot be created (fresh partition, read-only mount) the log goes to
    ``fallback_dir``, normally the parent of the temporary install directory,
    and then to the working directory. Repeated calls are no-ops.

    Returns the file path actually used.
    """

    root = logging.getLogger()
    root.setLevel(level)

    if getattr(root, "_pilot_installer_log_path", None):
        return root._pilot_installer_log_path  # type: ignore[attr-defined]

    candidates = [log_path]
    if fallback_dir:
        candidates.append(os.path.join(fallback_dir, FALLBACK_LOG_NAME))
    candidates.append(str(Path.cwd() / FALLBACK_LOG_NAME))

    file_handler: Optional[logging.Handler] = None
    chosen_path = candidates[-1]
    for candidate in candidates:
        try:
            file_handler = _open_log(candidate)
        except OSError:
            continue
        chosen_path = candidate
        break
    if file_handler is None:
        raise OSError(f"No writable log location among: {', '.join(candidates)}")

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )
    handlers: list[logging.Handler] = [file_handler]
    if also_console:
        handlers.append(logging.StreamHandler())
    for h in handlers:
        h.setFormatter(fmt)
        root.addHandler(h)

    setattr(root, "_pilot_installer_log_path", chosen_path)

    logging.getLogger(__name__).info(
        "Logging initialized (requested=%s, actual=%s)", log_path, chosen_path
    )
    return chosen_path
