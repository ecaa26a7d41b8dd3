from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.apt_repo import add_winehq_repo, component_enabled, enable_universe
from ..lib.pkg import add_foreign_architecture, apt_update, apt_upgrade
from ..report import add_warning

logger = logging.getLogger(__name__)


class ConfigureReposStep:
    step_id = "20_configure_repos"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        dry_run = bool(cfg.get("dry_run", False))
        decisions = state.setdefault("execution", {}).setdefault("decisions", {})

        # Availability checks are only accurate once every repo is registered and refreshed.
        changed = False

        if component_enabled("universe"):
            logger.info("'universe' repository already enabled")
            decisions["universe"] = "present"
        else:
            logger.info("Enabling 'universe' repository (required for many community packages)")
            try:
                enable_universe(dry_run=dry_run)
                decisions["universe"] = "enabled"
                changed = True
            except (OSError, RuntimeError) as e:
                add_warning(state, f"add-apt-repository universe failed: {e}", step=self.step_id)
                decisions["universe"] = "failed"

        if bool(cfg.get("winehq", False)):
            logger.info("Adding WineHQ repository and keys (for winehq / vkd3d packages)")
            try:
                decisions["winehq_sources"] = add_winehq_repo(dry_run=dry_run)
                changed = True
            except (OSError, RuntimeError) as e:
                add_warning(state, f"Could not add WineHQ repository: {e}", step=self.step_id)

        if bool(cfg.get("libs_32bit", False)):
            logger.info("Enabling i386 architecture for 32-bit compatibility (Steam, Wine)")
            try:
                changed = add_foreign_architecture("i386", dry_run=dry_run) or changed
                decisions["i386"] = True
            except (OSError, RuntimeError) as e:
                add_warning(state, f"Could not add i386 architecture: {e}", step=self.step_id)
                decisions["i386"] = False

        auto_update = bool(cfg.get("auto_update", False))
        if changed or auto_update:
            try:
                apt_update(dry_run=dry_run)
            except (OSError, RuntimeError) as e:
                add_warning(state, f"apt update failed: {e}", step=self.step_id)
        if auto_update:
            try:
                apt_upgrade(dry_run=dry_run)
            except (OSError, RuntimeError) as e:
                add_warning(state, f"apt upgrade failed: {e}", step=self.step_id)

        decisions["index_refreshed"] = changed or auto_update
        return state
