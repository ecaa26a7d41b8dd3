from __future__ import annotations

import logging
from typing import Sequence

from .command import CmdResult, run_cmd
from .env import SetupEnvironmentError

logger = logging.getLogger(__name__)


def apt_update(*, dry_run: bool = False) -> None:
    run_cmd(["apt-get", "update"], dry_run=dry_run)


def apt_upgrade(*, dry_run: bool = False) -> None:
    run_cmd(["apt-get", "upgrade", "-y"], dry_run=dry_run)


def apt_install(
    packages: Sequence[str],
    *,
    with_recommends: bool = True,
    dry_run: bool = False,
) -> CmdResult | None:
    if not packages:
        return None
    argv = ["apt-get", "install", "-y"]
    if not with_recommends:
        argv.append("--no-install-recommends")
    return run_cmd([*argv, *packages], dry_run=dry_run)


def apt_has_package(package: str) -> bool:
    """Return True if apt knows about a package name (``name`` or ``name:arch``).

    Read-only, so it runs even in dry-run mode. Anything other than a clean
    exit from ``apt-cache show`` counts as "not known".
    """
    r = run_cmd(["apt-cache", "show", package], check=False)
    return r.returncode == 0


def ensure_index_queryable() -> None:
    """Fail early if the package index cannot be read at all."""
    try:
        run_cmd(["apt-cache", "stats"])
    except (OSError, RuntimeError) as e:
        raise SetupEnvironmentError(f"Package index is not queryable: {e}") from e


def apt_list_installed(packages: Sequence[str]) -> str:
    if not packages:
        return ""
    r = run_cmd(["apt", "list", "--installed", *packages], check=False)
    return r.stdout


def foreign_architectures() -> list[str]:
    r = run_cmd(["dpkg", "--print-foreign-architectures"], check=False)
    return [line.strip() for line in r.stdout.splitlines() if line.strip()]


def add_foreign_architecture(arch: str, *, dry_run: bool = False) -> bool:
    """Enable a dpkg foreign architecture. Returns True if it was added."""
    if arch in foreign_architectures():
        logger.info("Foreign architecture %s already enabled", arch)
        return False
    run_cmd(["dpkg", "--add-architecture", arch], dry_run=dry_run)
    return True
