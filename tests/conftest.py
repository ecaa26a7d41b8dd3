"""
Shared test fixtures and configuration.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

import pytest

from gaming_setup.config import SetupConfig
from gaming_setup.lib import apt_repo, flatpak, pkg, services, sysctl
from gaming_setup.lib.command import CmdResult
from gaming_setup.logging_utils import reset_logging
from gaming_setup.report import new_state


class FakeRunner:
    """Stand-in for run_cmd: records argv and answers by command prefix."""

    def __init__(self) -> None:
        self.calls: List[List[str]] = []
        self.responses: Dict[Tuple[str, ...], CmdResult] = {}
        self.failures: Dict[Tuple[str, ...], str] = {}

    def respond(self, prefix: Sequence[str], *, returncode: int = 0, stdout: str = "") -> None:
        self.responses[tuple(prefix)] = CmdResult(list(prefix), returncode, stdout, "")

    def fail(self, prefix: Sequence[str], message: str = "boom") -> None:
        self.failures[tuple(prefix)] = message

    def _match(self, table, argv: List[str]):
        best = None
        for prefix in table:
            if tuple(argv[: len(prefix)]) == prefix and (best is None or len(prefix) > len(best)):
                best = prefix
        return best

    def __call__(
        self,
        argv: Sequence[str],
        *,
        check: bool = True,
        env=None,
        input_text: Optional[str] = None,
        dry_run: bool = False,
    ) -> CmdResult:
        argv_list = list(argv)
        self.calls.append(argv_list)
        if dry_run:
            return CmdResult(argv_list, 0, "", "")
        failure = self._match(self.failures, argv_list)
        if failure is not None:
            raise RuntimeError(self.failures[failure])
        prefix = self._match(self.responses, argv_list)
        result = self.responses[prefix] if prefix is not None else CmdResult(argv_list, 0, "", "")
        if check and result.returncode != 0:
            raise RuntimeError(f"Command failed ({result.returncode})")
        return CmdResult(argv_list, result.returncode, result.stdout, result.stderr)

    def ran(self, *prefix: str) -> bool:
        return any(tuple(c[: len(prefix)]) == prefix for c in self.calls)


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def state():
    return new_state(SetupConfig().to_dict())


@pytest.fixture(autouse=True)
def _clean_logging():
    yield
    reset_logging()


@pytest.fixture
def fake_cmd(monkeypatch, runner):
    """Route every adapter module's run_cmd through the FakeRunner."""
    for mod in (pkg, apt_repo, flatpak, services, sysctl):
        monkeypatch.setattr(mod, "run_cmd", runner)
    return runner
