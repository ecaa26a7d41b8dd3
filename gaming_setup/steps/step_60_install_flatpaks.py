from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..catalog import flatpak_apps
from ..config import config_from_mapping
from ..lib.flatpak import ensure_flatpak, flatpak_install
from ..lib.manifests import load_packages_manifest
from ..report import add_warning

logger = logging.getLogger(__name__)


class InstallFlatpaksStep:
    step_id = "60_install_flatpaks"

    def __init__(self, manifest_path: Optional[str] = None) -> None:
        self.manifest_path = manifest_path

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = config_from_mapping(state.get("config") or {})
        exe = state.setdefault("execution", {})

        apps = flatpak_apps(load_packages_manifest(self.manifest_path), cfg)
        results: Dict[str, bool] = {}
        exe["flatpaks"] = results
        if not apps:
            logger.info("No Flatpak applications requested")
            return state

        try:
            usable = ensure_flatpak(dry_run=cfg.dry_run)
        except (OSError, RuntimeError) as e:
            add_warning(state, f"flatpak install failed: {e}", step=self.step_id)
            usable = False

        for app in apps:
            if not usable:
                results[app.app_id] = False
                continue
            logger.info("Installing %s (Flatpak)", app.app_id)
            try:
                flatpak_install(app.app_id, dry_run=cfg.dry_run)
                results[app.app_id] = True
            except (OSError, RuntimeError) as e:
                add_warning(state, f"{app.app_id} flatpak install failed: {e}", step=self.step_id)
                results[app.app_id] = False

        return state
