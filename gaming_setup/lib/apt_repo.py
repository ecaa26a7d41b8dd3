from __future__ import annotations

import logging
import re
from pathlib import Path

from .command import run_cmd
from .env import PATHS
from .pkg import apt_install

logger = logging.getLogger(__name__)

WINEHQ_KEY_URL = "https://dl.winehq.org/wine-builds/winehq.key"
WINEHQ_REPO_URL = "https://dl.winehq.org/wine-builds/ubuntu/"

_ONE_LINE = re.compile(r"^\s*deb\s+(\[[^\]]*\]\s+)?\S+\s+\S+\s+(?P<components>.+)$")


def _source_files(sources_list: str, sources_dir: str) -> list[Path]:
    files = [Path(sources_list)]
    d = Path(sources_dir)
    if d.is_dir():
        files += sorted(d.glob("*.list")) + sorted(d.glob("*.sources"))
    return [f for f in files if f.is_file()]


def _deb822_has_component(text: str, component: str) -> bool:
    # Stanzas are separated by blank lines; a disabled stanza has "Enabled: no".
    for stanza in re.split(r"\n\s*\n", text):
        fields: dict[str, str] = {}
        for line in stanza.splitlines():
            if ":" in line and not line.lstrip().startswith("#"):
                k, v = line.split(":", 1)
                fields[k.strip().lower()] = v.strip()
        if fields.get("enabled", "yes").lower() == "no":
            continue
        if "deb" not in fields.get("types", "").split():
            continue
        if component in fields.get("components", "").split():
            return True
    return False


def component_enabled(
    component: str,
    *,
    sources_list: str = PATHS.apt_sources_list,
    sources_dir: str = PATHS.apt_sources_dir,
) -> bool:
    """Return True if any enabled apt source (one-line or deb822) carries a component."""

    for f in _source_files(sources_list, sources_dir):
        text = f.read_text(encoding="utf-8", errors="replace")
        if f.suffix == ".sources":
            if _deb822_has_component(text, component):
                return True
            continue
        for line in text.splitlines():
            m = _ONE_LINE.match(line)
            if m and component in m.group("components").split():
                return True
    return False


def enable_universe(*, dry_run: bool = False) -> None:
    apt_install(["software-properties-common"], with_recommends=False, dry_run=dry_run)
    run_cmd(["add-apt-repository", "-y", "universe"], dry_run=dry_run)


def distro_codename() -> str:
    r = run_cmd(["lsb_release", "-sc"])
    codename = r.stdout.strip()
    if not codename:
        raise RuntimeError("lsb_release returned an empty codename")
    return codename


def winehq_sources_line(codename: str, keyring: str) -> str:
    return f"deb [signed-by={keyring}] {WINEHQ_REPO_URL} {codename} main\n"


def add_winehq_repo(
    *,
    codename: str | None = None,
    keyrings_dir: str = PATHS.apt_keyrings_dir,
    sources_dir: str = PATHS.apt_sources_dir,
    dry_run: bool = False,
) -> str:
    """Register the WineHQ repository (keyring + sources list).

    Notes:
    - Uses a signed-by keyring instead of apt-key (removed on current releases).
    - Caller refreshes the index afterwards.

    Returns the path of the written sources list.
    """

    apt_install(
        ["software-properties-common", "gnupg2", "ca-certificates", "wget"],
        with_recommends=False,
        dry_run=dry_run,
    )

    keyring = str(Path(keyrings_dir) / "winehq-archive.key")
    sources = Path(sources_dir) / "winehq.list"
    codename = codename or distro_codename()

    if not dry_run:
        Path(keyrings_dir).mkdir(parents=True, exist_ok=True)
    run_cmd(["wget", "-qO", keyring, WINEHQ_KEY_URL], dry_run=dry_run)

    if dry_run:
        logger.info("Would write %s", str(sources))
    else:
        sources.parent.mkdir(parents=True, exist_ok=True)
        sources.write_text(winehq_sources_line(codename, keyring), encoding="utf-8")

    logger.info("Configured WineHQ repo for %s (%s)", codename, str(sources))
    return str(sources)
