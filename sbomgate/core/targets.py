"""Scan target configuration."""

from __future__ import annotations

import pathlib
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Sequence, Set

from sbomgate.core.errors import ConfigError


class TargetCategory(str, Enum):
    ROOT = "root"
    NON_ROOT = "non-root"


@dataclass(frozen=True)
class ScanTarget:
    """A directory (relative to the source root) whose lockfile gets scanned."""

    path: str
    category: TargetCategory

    @property
    def is_root(self) -> bool:
        return self.category is TargetCategory.ROOT

    def directory(self, source_root: pathlib.Path) -> pathlib.Path:
        return source_root / self.path


DEFAULT_TARGETS: Sequence[ScanTarget] = (
    ScanTarget("code-editor-src", TargetCategory.ROOT),
    ScanTarget("code-editor-src/remote", TargetCategory.NON_ROOT),
    ScanTarget("code-editor-src/extensions", TargetCategory.NON_ROOT),
    ScanTarget("code-editor-src/remote/web", TargetCategory.NON_ROOT),
)


def parse_targets(entries: Iterable[object]) -> List[ScanTarget]:
    targets: List[ScanTarget] = []
    seen: Set[str] = set()
    for index, entry in enumerate(entries):
        if isinstance(entry, str):
            entry = {"path": entry}
        if not isinstance(entry, dict):
            raise ConfigError(f"targets[{index}] must be a mapping or a path string")
        path = str(entry.get("path") or "").strip().strip("/")
        if not path:
            raise ConfigError(f"targets[{index}] is missing a path")
        if path in seen:
            raise ConfigError(f"targets[{index}] duplicates {path!r}")
        seen.add(path)
        category = str(entry.get("category") or TargetCategory.NON_ROOT.value).lower()
        try:
            targets.append(ScanTarget(path, TargetCategory(category)))
        except ValueError as exc:
            raise ConfigError(f"targets[{index}] has unknown category {category!r}") from exc
    return targets

