from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass
from typing import Iterable

logger = logging.getLogger(__name__)


class SetupEnvironmentError(RuntimeError):
    """The host cannot be provisioned (privileges, tools, package index)."""


@dataclass(frozen=True)
class Paths:
    apt_sources_list: str = "/etc/apt/sources.list"
    apt_sources_dir: str = "/etc/apt/sources.list.d"
    apt_keyrings_dir: str = "/etc/apt/keyrings"
    sysctl_conf: str = "/etc/sysctl.d/99-gaming.conf"
    log_default: str = "/var/log/gaming-setup.log"


PATHS = Paths()

REQUIRED_TOOLS = ("apt-get", "apt-cache", "dpkg")


def is_root() -> bool:
    return os.geteuid() == 0


def require_root() -> None:
    if not is_root():
        raise SetupEnvironmentError("Run as root (sudo).")


def missing_tools(tools: Iterable[str] = REQUIRED_TOOLS) -> list[str]:
    return [t for t in tools if shutil.which(t) is None]


def require_tools(tools: Iterable[str] = REQUIRED_TOOLS) -> None:
    missing = missing_tools(tools)
    if missing:
        raise SetupEnvironmentError(f"Required tools not found on PATH: {', '.join(missing)}")


def have_command(name: str) -> bool:
    return shutil.which(name) is not None
