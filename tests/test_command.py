"""
Tests for the command runner.
"""

from __future__ import annotations

import sys

import pytest

from gaming_setup.lib.command import fmt_argv, run_cmd


class TestRunCmd:
    def test_dry_run_does_not_execute(self, tmp_path):
        marker = tmp_path / "marker"
        r = run_cmd(["touch", str(marker)], dry_run=True)
        assert r.ok
        assert not marker.exists()

    def test_captures_stdout(self):
        r = run_cmd([sys.executable, "-c", "print('hello')"])
        assert r.stdout.strip() == "hello"
        assert r.returncode == 0

    def test_check_raises_on_failure(self):
        with pytest.raises(RuntimeError, match="Command failed"):
            run_cmd([sys.executable, "-c", "import sys; sys.exit(3)"])

    def test_no_check_returns_code(self):
        r = run_cmd([sys.executable, "-c", "import sys; sys.exit(3)"], check=False)
        assert r.returncode == 3
        assert not r.ok

    def test_noninteractive_env(self):
        r = run_cmd([sys.executable, "-c", "import os; print(os.environ['DEBIAN_FRONTEND'])"])
        assert r.stdout.strip() == "noninteractive"

    def test_missing_binary_raises_oserror(self):
        with pytest.raises(OSError):
            run_cmd(["definitely-not-a-real-binary-xyz"], check=False)

    def test_fmt_argv_quotes(self):
        assert fmt_argv(["echo", "a b"]) == "echo 'a b'"
