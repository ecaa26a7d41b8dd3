from __future__ import annotations

import logging

from .command import run_cmd
from .env import have_command
from .pkg import apt_install

logger = logging.getLogger(__name__)

FLATHUB_NAME = "flathub"
FLATHUB_URL = "https://flathub.org/repo/flathub.flatpakrepo"


def ensure_flatpak(*, dry_run: bool = False) -> bool:
    """Install flatpak and register Flathub if flatpak is missing.

    Returns True when flatpak is usable afterwards (always True in dry-run).
    """
    if not have_command("flatpak"):
        logger.info("Installing flatpak")
        apt_install(["flatpak"], dry_run=dry_run)
    run_cmd(
        ["flatpak", "remote-add", "--if-not-exists", FLATHUB_NAME, FLATHUB_URL],
        check=False,
        dry_run=dry_run,
    )
    return dry_run or have_command("flatpak")


def flatpak_install(app_id: str, *, remote: str = FLATHUB_NAME, dry_run: bool = False) -> None:
    run_cmd(["flatpak", "install", "-y", "--noninteractive", remote, app_id], dry_run=dry_run)
