"""Environment details recorded alongside benchmark output."""
from __future__ import annotations

import platform
import subprocess

import numpy as np


def git_commit_hash() -> str | None:
    try:
        return subprocess.check_output(["git", "rev-parse", "HEAD"], text=True, stderr=subprocess.DEVNULL).strip()
    except (OSError, subprocess.CalledProcessError):
        return None


def env_info() -> dict[str, str | None]:
    return {
        "python": platform.python_version(),
        "implementation": platform.python_implementation(),
        "numpy": np.__version__,
        "machine": platform.machine(),
        "platform": platform.platform(),
        "git_commit": git_commit_hash(),
    }
