"""
Unit tests for the dev CLI runner.
"""

import subprocess

import pytest

from cli import _runner


class TestRun:
    """Tests for run."""

    @pytest.mark.anyio
    @pytest.mark.parametrize("returncode", [0, 3])
    async def test_exits_with_command_return_code(self, monkeypatch, returncode):
        calls = []

        def fake_run(cmd):
            calls.append(list(cmd))
            return subprocess.CompletedProcess(cmd, returncode)

        monkeypatch.setattr(_runner.subprocess, "run", fake_run)

        with pytest.raises(SystemExit) as exc_info:
            _runner.run(["ruff", "check", "."])

        assert exc_info.value.code == returncode
        assert calls == [["ruff", "check", "."]]
