from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.env import PATHS
from ..lib.sysctl import GAMING_SYSCTL, reload_sysctl, write_sysctl_conf
from ..report import add_warning

logger = logging.getLogger(__name__)


class WriteTuningStep:
    step_id = "80_write_tuning"

    def __init__(self, sysctl_path: str = PATHS.sysctl_conf) -> None:
        self.sysctl_path = sysctl_path

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        dry_run = bool(cfg.get("dry_run", False))

        logger.info("Recommended sysctl & inotify tuning for gaming")
        try:
            write_sysctl_conf(self.sysctl_path, GAMING_SYSCTL, dry_run=dry_run)
        except OSError as e:
            add_warning(state, f"Could not write {self.sysctl_path}: {e}", step=self.step_id)
            return state

        try:
            reloaded = reload_sysctl(dry_run=dry_run)
        except OSError as e:
            add_warning(state, f"Could not run sysctl --system: {e}", step=self.step_id)
        else:
            if not reloaded:
                add_warning(state, "sysctl --system reported errors (bbr may be unavailable on this kernel)", step=self.step_id)

        state.setdefault("execution", {}).setdefault("decisions", {})["sysctl_conf"] = self.sysctl_path
        return state
