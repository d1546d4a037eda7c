"""Invoke ``cyclonedx-npm`` to produce a CycloneDX SBOM for one target."""

from __future__ import annotations

import logging
import pathlib
import subprocess
from typing import Callable, List

from sbomgate.core.errors import ToolInvocationError
from sbomgate.core.targets import ScanTarget, TargetCategory

_LOG = logging.getLogger(__name__)

EXECUTABLE = "cyclonedx-npm"
# Highest CycloneDX version accepted by the Inspector ScanSbom API.
SPEC_VERSION = "1.5"
IGNORE_ERRORS_FLAG = "--ignore-npm-errors"


def build_command(category: TargetCategory, output: pathlib.Path) -> List[str]:
    command = [
        EXECUTABLE,
        "--omit",
        "dev",
        "--output-reproducible",
        "--spec-version",
        SPEC_VERSION,
        "--output-file",
        str(output),
    ]
    if category is not TargetCategory.ROOT:
        command.append(IGNORE_ERRORS_FLAG)
    return command


def generate(
    target: ScanTarget,
    source_root: pathlib.Path,
    output: pathlib.Path,
    run: Callable[..., subprocess.CompletedProcess] = subprocess.run,
) -> pathlib.Path:
    directory = target.directory(source_root)
    command = build_command(target.category, output)
    _LOG.info("Generating SBOM for %s: %s", target.path, " ".join(command))
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        result = run(command, cwd=directory, check=False, capture_output=True, text=True)
    except OSError as exc:
        raise ToolInvocationError(EXECUTABLE, target.path, str(exc)) from exc
    if result.returncode != 0:
        detail = (result.stderr or result.stdout or "").strip() or f"exit status {result.returncode}"
        raise ToolInvocationError(EXECUTABLE, target.path, detail)
    if not output.is_file():
        raise ToolInvocationError(EXECUTABLE, target.path, f"no SBOM written to {output}")
    return output
