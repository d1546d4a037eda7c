"""Sum per-severity counts over every scan-result artifact listed in the manifest."""

from __future__ import annotations

import json
import logging
import pathlib
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from sbomgate.core.labels import LabelMap
from sbomgate.core.severity import Severity, SeverityCounts

_LOG = logging.getLogger(__name__)

DETAIL_KEYS = ("vulnerability_message", "error_message")


@dataclass(frozen=True)
class ScanMessage:
    purl: Optional[str]
    text: str

    def render(self) -> str:
        return f"- {self.purl or 'Unknown'}: {self.text}"


@dataclass
class TargetResult:
    name: str
    path: pathlib.Path
    counts: SeverityCounts
    messages: List[ScanMessage] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"target": self.name, "path": str(self.path)}
        payload.update(self.counts.to_dict())
        payload["concerning"] = self.counts.concerning
        return payload


@dataclass
class AggregateReport:
    results: List[TargetResult]
    skipped: List[pathlib.Path]
    totals: SeverityCounts

    @property
    def concerning(self) -> int:
        return self.totals.concerning


def extract_counts(document: object) -> SeverityCounts:
    if not isinstance(document, dict):
        return SeverityCounts()
    sbom = document.get("sbom")
    if not isinstance(sbom, dict):
        return SeverityCounts()
    return SeverityCounts.from_mapping(sbom.get("vulnerability_count"))


def extract_messages(document: object) -> List[ScanMessage]:
    """Pull the vulnerability/error messages out of ``sbom.messages``."""

    if not isinstance(document, dict) or not isinstance(document.get("sbom"), dict):
        return []
    raw_messages = document["sbom"].get("messages")
    if not isinstance(raw_messages, list):
        return []
    messages: List[ScanMessage] = []
    for entry in raw_messages:
        if not isinstance(entry, dict):
            continue
        if not any(entry.get(key) for key in DETAIL_KEYS):
            continue
        text = entry.get("vulnerability_message") or entry.get("error_message") or entry.get("info_message")
        purl = entry.get("purl")
        messages.append(ScanMessage(purl=str(purl) if purl else None, text=str(text)))
    return messages


class Aggregator:
    """Running totals for a single analysis run."""

    def __init__(self, labels: Optional[LabelMap] = None) -> None:
        self._labels = labels or LabelMap()
        self.results: List[TargetResult] = []
        self.skipped: List[pathlib.Path] = []
        self.totals = SeverityCounts()

    def add(self, path: pathlib.Path) -> Optional[TargetResult]:
        if not path.is_file():
            _LOG.warning("⚠️ Warning: scan result %s not found, skipping", path)
            self.skipped.append(path)
            return None

        name = self._labels.display_name(path)
        document = _load_document(path)
        result = TargetResult(
            name=name,
            path=path,
            counts=extract_counts(document),
            messages=extract_messages(document),
        )
        _print_target(result)
        self.results.append(result)
        self.totals = self.totals + result.counts
        return result

    def run(self, paths: Iterable[pathlib.Path]) -> AggregateReport:
        for path in paths:
            self.add(path)
        return self.report()

    def report(self) -> AggregateReport:
        return AggregateReport(results=list(self.results), skipped=list(self.skipped), totals=self.totals)


def _load_document(path: pathlib.Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        _LOG.warning("⚠️ Warning: could not parse %s (%s); counting it as zero", path, exc)
        return None


def _print_target(result: TargetResult) -> None:
    print(f"=== SBOM Security Scan Results for {result.name} ===")
    for level in Severity:
        print(f"{level.value.title()} vulnerabilities: {result.counts.get(level)}")
    print(f"Concerning vulnerabilities (excluding low): {result.counts.concerning}")
    print("=" * 50)
