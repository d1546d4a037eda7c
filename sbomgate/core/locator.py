"""Select the configured targets that actually carry a lockfile."""

from __future__ import annotations

import logging
import pathlib
from typing import Iterable, List

from sbomgate.core.targets import ScanTarget

_LOG = logging.getLogger(__name__)

MANIFEST_NAME = "package-lock.json"


def locate(targets: Iterable[ScanTarget], source_root: pathlib.Path) -> List[ScanTarget]:
    """Return the targets whose directory and ``package-lock.json`` both exist.

    Anything else is skipped with a warning; a directory may legitimately be
    absent from a given release configuration.
    """

    found: List[ScanTarget] = []
    for target in targets:
        directory = target.directory(source_root)
        if not directory.is_dir():
            _LOG.warning("⚠️ Warning: directory %s not found, skipping", target.path)
            continue
        if not (directory / MANIFEST_NAME).is_file():
            _LOG.warning("⚠️ Warning: %s not found in %s, skipping", MANIFEST_NAME, target.path)
            continue
        found.append(target)
    return found
