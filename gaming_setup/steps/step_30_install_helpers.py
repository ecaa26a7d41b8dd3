from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..catalog import helper_packages
from ..lib.manifests import load_packages_manifest
from ..lib.pkg import apt_install
from ..report import add_warning

logger = logging.getLogger(__name__)


class InstallHelpersStep:
    step_id = "30_install_helpers"

    def __init__(self, manifest_path: Optional[str] = None) -> None:
        self.manifest_path = manifest_path

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        dry_run = bool(cfg.get("dry_run", False))

        packages = helper_packages(load_packages_manifest(self.manifest_path))
        logger.info("Installing small set of common helper packages (if missing)")
        try:
            apt_install(packages, dry_run=dry_run)
        except (OSError, RuntimeError) as e:
            add_warning(state, f"Some common helper packages failed to install; continuing ({e})", step=self.step_id)
        return state
