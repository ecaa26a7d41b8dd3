from __future__ import annotations

import logging
from typing import Any, Dict, List

from ..lib.env import have_command
from ..lib.services import enable_now, unit_file_exists
from ..report import add_warning

logger = logging.getLogger(__name__)

TUNING_SERVICES = ("tlp", "irqbalance", "thermald")


class ConfigureServicesStep:
    step_id = "70_configure_services"

    def _enable(self, state: Dict[str, Any], unit: str, enabled: List[str], *, dry_run: bool) -> None:
        try:
            enable_now(unit, dry_run=dry_run)
            enabled.append(unit)
        except (OSError, RuntimeError) as e:
            add_warning(state, f"Failed enabling {unit}: {e}", step=self.step_id)

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        dry_run = bool(cfg.get("dry_run", False))
        enabled: List[str] = []

        if have_command("gamemoded"):
            logger.info("Enabling gamemoded service")
            self._enable(state, "gamemoded.service", enabled, dry_run=dry_run)

        if have_command("mangohud"):
            logger.info("MangoHud installed. Example: mangohud <game> or add 'mangohud %command%' to launch options.")

        for svc in TUNING_SERVICES:
            if unit_file_exists(svc):
                self._enable(state, svc, enabled, dry_run=dry_run)
            else:
                logger.info("Service %s not installed; not enabling", svc)

        state.setdefault("execution", {}).setdefault("decisions", {})["services_enabled"] = enabled
        return state
