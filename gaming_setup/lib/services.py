from __future__ import annotations

import logging

from .command import run_cmd

logger = logging.getLogger(__name__)


def unit_file_exists(unit: str) -> bool:
    """True if systemd knows a unit file named ``unit`` (``.service`` assumed when bare).

    A host without systemctl has no unit files to enable, so that counts as "not present".
    """

    name = unit if "." in unit else f"{unit}.service"
    try:
        r = run_cmd(["systemctl", "list-unit-files", "--no-legend", name], check=False)
    except OSError as e:
        logger.warning("Cannot query systemd for %s (%s); treating as not installed", name, e)
        return False
    return any(line.split()[:1] == [name] for line in r.stdout.splitlines())


def enable_now(unit: str, *, dry_run: bool = False) -> None:
    run_cmd(["systemctl", "enable", "--now", unit], dry_run=dry_run)
