"""Shared helpers for the pipesh tests.

Most tests fork real processes.  Anything that changes a descriptor table
runs in a forked child so the test runner's own stdio is never touched.
"""

import os
import shutil
import traceback
from pathlib import Path
from typing import Callable

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]

TOOLS = ("cat", "echo", "grep", "head", "sh", "sleep", "sort", "tr", "uniq", "yes")


def run_in_child(fn: Callable[[], None]) -> int:
    """Run fn in a forked child and return the child's raw wait status.

    The child exits 0 if fn returns, 99 if it raises.
    """
    pid = os.fork()
    if pid == 0:
        code = 0
        try:
            fn()
        except BaseException:
            traceback.print_exc()
            code = 99
        os._exit(code)
    _, status = os.waitpid(pid, 0)
    return status


def exit_code(status: int) -> int:
    """Exit code of a child that must have exited normally."""
    assert os.WIFEXITED(status), f"child did not exit normally: {status}"
    return os.WEXITSTATUS(status)


@pytest.fixture
def tools() -> dict[str, str]:
    """Absolute paths of the external programs the tests run."""
    found = {}
    for name in TOOLS:
        path = shutil.which(name)
        if path is None:
            pytest.skip(f"{name} not available")
        found[name] = path
    return found
