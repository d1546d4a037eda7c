"""Persist and reload the list of scan-result artifacts handed from run-scan to analyze-results."""

from __future__ import annotations

import os
import pathlib
from typing import Iterable, List

from sbomgate.core.errors import ResultsManifestNotFound, ResultsManifestUnreadable

DEFAULT_FILENAME = "sbom_scan_results_paths.txt"


def write_manifest(paths: Iterable[pathlib.Path], destination: pathlib.Path) -> pathlib.Path:
    destination.parent.mkdir(parents=True, exist_ok=True)
    with destination.open("w", encoding="utf-8") as handle:
        for path in paths:
            handle.write(f"{pathlib.Path(path).resolve()}\n")
        handle.flush()
        os.fsync(handle.fileno())
    return destination


def read_manifest(path: pathlib.Path) -> List[pathlib.Path]:
    if not path.is_file():
        raise ResultsManifestNotFound(path)
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError) as exc:
        raise ResultsManifestUnreadable(path, str(exc)) from exc
    return [pathlib.Path(line.strip()) for line in lines if line.strip()]
