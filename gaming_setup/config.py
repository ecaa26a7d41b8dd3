from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional


@dataclass(frozen=True)
class SetupConfig:
    """User-facing toggles. Defaults match a typical Pop!_OS gaming box."""

    steam_flatpak: bool = False
    lutris: bool = True
    protonup_flatpak: bool = True
    mangohud: bool = True
    gamemode: bool = True
    vkbasalt: bool = True
    vulkan_tools: bool = True
    libs_32bit: bool = True
    obs: bool = True
    # Adds the WineHQ repo (winehq-* and packaged vkd3d builds).
    winehq: bool = False
    # Refresh and upgrade the system before planning.
    auto_update: bool = False
    dry_run: bool = False

    def enabled(self, toggle: str) -> bool:
        if toggle not in toggle_names():
            raise ValueError(f"Unknown toggle: {toggle}")
        return bool(getattr(self, toggle))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def toggle_names() -> list[str]:
    return [f.name for f in fields(SetupConfig)]


def config_from_mapping(raw: Mapping[str, Any]) -> SetupConfig:
    known = set(toggle_names())
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
    for k, v in raw.items():
        if not isinstance(v, bool):
            raise ValueError(f"Config key {k} must be true/false, got {v!r}")
    return SetupConfig(**dict(raw))


def load_setup_config(path: Optional[str]) -> SetupConfig:
    if path is None:
        return SetupConfig()

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError("setup config must be YAML")

    try:
        import yaml  # type: ignore
    except Exception as e:
        raise RuntimeError("PyYAML is required to read the setup config") from e

    raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"{p.name} must contain a mapping/object")

    return config_from_mapping(raw)


def apply_overrides(
    cfg: SetupConfig,
    *,
    enable: Iterable[str] = (),
    disable: Iterable[str] = (),
    dry_run: Optional[bool] = None,
) -> SetupConfig:
    changes: Dict[str, Any] = {}
    for name in enable:
        cfg.enabled(name)
        changes[name] = True
    for name in disable:
        cfg.enabled(name)
        changes[name] = False
    if dry_run is not None:
        changes["dry_run"] = dry_run
    return replace(cfg, **changes)
