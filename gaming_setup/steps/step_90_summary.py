from __future__ import annotations

import logging
from typing import Any, Dict, List

from ..lib.pkg import apt_list_installed
from ..planner import SkipReason

logger = logging.getLogger(__name__)

VKBASALT_BUILD_HINT = """\
vkBasalt wasn't in apt. To build it yourself:
  git clone https://github.com/DadSchoorse/vkBasalt.git
  cd vkBasalt
  meson setup build
  meson compile -C build
  sudo meson install -C build"""

RECOMMENDATIONS = """\
Recommendations:
 - Reboot if you installed drivers or kernel packages: sudo reboot
 - To get WineHQ (Wine + vkd3d packaged), re-run with --enable winehq (this adds the WineHQ repo).
 - If packages still fail, run: sudo apt update && apt-cache policy <pkg> to inspect availability."""


class SummaryStep:
    step_id = "90_summary"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        exe = state.get("execution") or {}
        plan = exe.get("plan") or {}
        dry_run = bool(cfg.get("dry_run", False))

        to_install: List[str] = list(plan.get("to_install") or [])
        skipped: List[Dict[str, str]] = list(plan.get("skipped") or [])

        if to_install and not dry_run:
            installed = apt_list_installed(to_install)
            if installed.strip():
                logger.info("SUMMARY (apt list --installed):\n%s", installed.rstrip())

        unavailable = [s["name"] for s in skipped if s["reason"] == SkipReason.UNAVAILABLE.value]
        if skipped:
            lines = "\n".join(f" - {s['name']} ({s['reason']}, {s['group']})" for s in skipped)
            logger.info("Skipped packages:\n%s", lines)
        else:
            logger.info("Skipped packages: none, all requested packages were available in apt.")

        if bool(cfg.get("vkbasalt", False)) and "vkbasalt" in unavailable:
            logger.warning(VKBASALT_BUILD_HINT)

        warnings = exe.get("warnings") or []
        if warnings:
            logger.warning("%d step(s) reported problems; see the log for details", len(warnings))
        if unavailable:
            logger.info("If some packages were skipped, run 'sudo apt update' and re-run gaming-setup.")
        logger.info(RECOMMENDATIONS)
        logger.info("All done.")
        return state
