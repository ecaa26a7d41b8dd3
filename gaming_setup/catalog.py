from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List

from .config import SetupConfig, toggle_names
from .planner import AllOf, FirstOf, PackageGroup, requests_for

logger = logging.getLogger(__name__)

_KINDS = {"all": AllOf, "first": FirstOf}


@dataclass(frozen=True)
class FlatpakApp:
    app_id: str
    toggle: str


def _check_toggle(toggle: Any, where: str) -> None:
    if toggle is not None and toggle not in toggle_names():
        raise ValueError(f"{where}: unknown toggle {toggle!r}")


def _packages(entry: Dict[str, Any], where: str) -> List[str]:
    pkgs = entry.get("packages") or []
    if not isinstance(pkgs, list):
        raise ValueError(f"{where}: packages must be a list")
    return [str(p).strip() for p in pkgs if str(p).strip()]


def build_groups(manifest: Dict[str, Any], cfg: SetupConfig) -> List[PackageGroup]:
    """Turn manifest ``apt_groups`` into planner groups with config-driven enable flags."""

    entries = manifest.get("apt_groups") or []
    if not isinstance(entries, list):
        raise ValueError("packages manifest: apt_groups must be a list")

    groups: List[PackageGroup] = []
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ValueError(f"apt_groups[{i}] must be a mapping")
        group_id = str(entry.get("id") or f"group_{i}")
        where = f"apt_groups[{group_id}]"

        kind = str(entry.get("kind", "all")).lower()
        if kind not in _KINDS:
            raise ValueError(f"{where}: kind must be one of {sorted(_KINDS)}, got {kind!r}")

        toggle = entry.get("toggle")
        _check_toggle(toggle, where)
        enabled = True if toggle is None else cfg.enabled(str(toggle))

        groups.append(_KINDS[kind](group_id, requests_for(_packages(entry, where), enabled=enabled)))

    logger.debug("Built %d package groups", len(groups))
    return groups


def flatpak_apps(manifest: Dict[str, Any], cfg: SetupConfig) -> List[FlatpakApp]:
    """Flatpak applications whose toggle is on, in manifest order."""

    apps: List[FlatpakApp] = []
    for entry in manifest.get("flatpaks") or []:
        where = f"flatpaks[{entry.get('id')}]"
        toggle = entry.get("toggle")
        _check_toggle(toggle, where)
        app_id = str(entry.get("app") or "").strip()
        if not app_id:
            raise ValueError(f"{where}: app is required")
        if toggle is None or cfg.enabled(str(toggle)):
            apps.append(FlatpakApp(app_id=app_id, toggle=str(toggle or "")))
    return apps


def helper_packages(manifest: Dict[str, Any]) -> List[str]:
    return _packages({"packages": manifest.get("helper_packages")}, "helper_packages")
