"""Read the checked-out branch for scan banners."""

from __future__ import annotations

import pathlib
import subprocess
from typing import Optional

UNKNOWN = "unknown"


def current_ref(repo_root: str | pathlib.Path = ".") -> str:
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--abbrev-ref", "HEAD"],
            cwd=pathlib.Path(repo_root),
            check=True,
            capture_output=True,
            text=True,
        )
    except (OSError, subprocess.CalledProcessError):
        return UNKNOWN
    return result.stdout.strip() or UNKNOWN


def resolve_head_ref(explicit: Optional[str], repo_root: str | pathlib.Path = ".") -> str:
    if explicit:
        return explicit
    return current_ref(repo_root)
