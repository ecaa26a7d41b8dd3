from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping

from .command import run_cmd

logger = logging.getLogger(__name__)

GAMING_SYSCTL: dict[str, str] = {
    "vm.swappiness": "10",
    "vm.vfs_cache_pressure": "50",
    "fs.inotify.max_user_watches": "524288",
    "net.core.default_qdisc": "fq",
    "net.ipv4.tcp_congestion_control": "bbr",
}


def render_sysctl(settings: Mapping[str, str]) -> str:
    return "".join(f"{k}={v}\n" for k, v in settings.items())


def write_sysctl_conf(path: str, settings: Mapping[str, str], *, dry_run: bool = False) -> bool:
    """Write a sysctl.d drop-in. Returns True if the file content changed."""

    p = Path(path)
    contents = render_sysctl(settings)
    if p.exists() and p.read_text(encoding="utf-8") == contents:
        logger.info("%s already up to date", str(p))
        return False
    if dry_run:
        logger.info("Would write %s", str(p))
        return True
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(contents, encoding="utf-8")
    return True


def reload_sysctl(*, dry_run: bool = False) -> bool:
    r = run_cmd(["sysctl", "--system"], check=False, dry_run=dry_run)
    return r.ok
