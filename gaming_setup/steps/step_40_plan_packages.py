from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..catalog import build_groups
from ..config import config_from_mapping
from ..lib.manifests import load_packages_manifest
from ..lib.pkg import apt_has_package
from ..planner import AvailabilityOracle, SkipReason, plan

logger = logging.getLogger(__name__)


class PlanPackagesStep:
    step_id = "40_plan_packages"

    def __init__(
        self,
        manifest_path: Optional[str] = None,
        oracle: Optional[AvailabilityOracle] = None,
    ) -> None:
        self.manifest_path = manifest_path
        self.oracle = oracle or apt_has_package

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = config_from_mapping(state.get("config") or {})

        groups = build_groups(load_packages_manifest(self.manifest_path), cfg)
        result = plan(groups, self.oracle)

        for s in result.skipped:
            if s.reason is SkipReason.UNAVAILABLE:
                logger.warning("Package %s not found in apt (%s); skipping", s.name, s.group)
            else:
                logger.info("Package %s skipped (%s, %s)", s.name, s.reason.value, s.group)

        state.setdefault("execution", {})["plan"] = result.to_dict()
        logger.info("Planned APT install list: %s", " ".join(result.to_install) or "<none>")
        return state
