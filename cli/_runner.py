"""
Shared CLI runner helper.

Dev wrappers run their tool as a subprocess of the current interpreter so
they pick up the same virtual environment as the installed package.
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence


def run(cmd: Sequence[str]) -> None:
    """
    Run a command and exit with its return code.

    Args:
        cmd: Command and arguments to execute
    """
    result = subprocess.run(cmd)
    raise SystemExit(result.returncode)
