from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.pkg import apt_install
from ..report import add_warning

logger = logging.getLogger(__name__)


class InstallPackagesStep:
    step_id = "50_install_packages"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        exe = state.setdefault("execution", {})
        dry_run = bool(cfg.get("dry_run", False))

        packages = list((exe.get("plan") or {}).get("to_install") or [])
        if not packages:
            logger.info("No Debian packages to install (all requested packages were unavailable or skipped)")
            exe["install"] = {"packages": [], "ok": True}
            return state

        logger.info("Installing %d selected Debian packages", len(packages))
        ok = True
        try:
            apt_install(packages, dry_run=dry_run)
        except (OSError, RuntimeError) as e:
            ok = False
            add_warning(
                state,
                "Some apt installs failed. Run: sudo apt update && re-run gaming-setup "
                f"(or install the missing packages manually). {e}",
                step=self.step_id,
            )

        exe["install"] = {"packages": packages, "ok": ok}
        return state
