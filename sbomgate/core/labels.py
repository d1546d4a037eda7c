"""Naming of per-target artifacts and the reverse lookup used at analysis time."""

from __future__ import annotations

import pathlib
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

from sbomgate.core.errors import ConfigError
from sbomgate.core.targets import ScanTarget

SEPARATOR = "/"
REPLACEMENT = "_"
SBOM_SUFFIX = ".sbom.json"
RESULT_SUFFIX = ".scan-result.json"


def encode_label(path: str) -> str:
    return path.strip(SEPARATOR).replace(SEPARATOR, REPLACEMENT)


def decode_label(label: str) -> str:
    return label.replace(REPLACEMENT, SEPARATOR)


@dataclass(frozen=True)
class ArtifactNames:
    label: str
    sbom_path: pathlib.Path
    result_path: pathlib.Path


class LabelMap:
    """Bidirectional mapping between target directories and artifact labels."""

    def __init__(self, targets: Iterable[ScanTarget] = ()) -> None:
        self._by_path: Dict[str, str] = {}
        self._by_label: Dict[str, str] = {}
        for target in targets:
            self.register(target.path)

    def register(self, path: str) -> str:
        label = encode_label(path)
        existing = self._by_label.get(label)
        if existing is not None and existing != path:
            raise ConfigError(f"{path!r} and {existing!r} encode to the same label {label!r}")
        self._by_path[path] = label
        self._by_label[label] = path
        return label

    def label_for(self, path: str) -> str:
        return self._by_path.get(path) or encode_label(path)

    def path_for(self, label: str) -> str:
        return self._by_label.get(label) or decode_label(label)

    def artifacts(self, path: str, output_dir: pathlib.Path) -> ArtifactNames:
        label = self.label_for(path)
        return ArtifactNames(
            label=label,
            sbom_path=output_dir / f"{label}{SBOM_SUFFIX}",
            result_path=output_dir / f"{label}{RESULT_SUFFIX}",
        )

    def label_from_result(self, result_path: pathlib.Path) -> Optional[str]:
        """Recover the label from a scan-result file name, if it carries the suffix."""

        name = result_path.name
        if not name.endswith(RESULT_SUFFIX):
            return None
        return name[: -len(RESULT_SUFFIX)]

    def display_name(self, result_path: pathlib.Path) -> str:
        label = self.label_from_result(result_path)
        if label is None:
            return result_path.stem
        return self.path_for(label)
