"""Pass/fail decision and console rendering for aggregated scan results."""

from __future__ import annotations

import datetime as dt
import json
import pathlib
from dataclasses import dataclass
from typing import Any, Dict

from sbomgate.core import metrics
from sbomgate.core.aggregator import AggregateReport
from sbomgate.core.severity import Severity, SeverityCounts


@dataclass(frozen=True)
class Verdict:
    passed: bool
    totals: SeverityCounts

    @property
    def concerning(self) -> int:
        return self.totals.concerning

    @property
    def exit_code(self) -> int:
        return 0 if self.passed else 1


def decide(report: AggregateReport) -> Verdict:
    """Pass only when nothing above ``low`` was reported across all targets."""

    return Verdict(passed=report.totals.concerning == 0, totals=report.totals)


def render(verdict: Verdict, report: AggregateReport) -> None:
    totals = verdict.totals
    print("=== Total SBOM Security Scan Results ===")
    print(f"Targets analysed: {len(report.results)} (skipped: {len(report.skipped)})")
    for level in Severity:
        print(f"Total {level.value.title()} vulnerabilities: {totals.get(level)}")
    print("=" * 50)

    if verdict.passed:
        print("✅ Security scan PASSED: No concerning vulnerabilities found")
        print(f"Low vulnerabilities: {totals.low} (acceptable)")
        return

    print(f"❌ Security scan FAILED: Found {verdict.concerning} concerning vulnerabilities")
    print(f"Critical: {totals.critical}, High: {totals.high}, Medium: {totals.medium}, Other: {totals.other}")
    print("")
    print("Concerning vulnerabilities by target:")
    for result in report.results:
        if result.counts.concerning:
            print(f"- {result.name}: {result.counts.concerning}")
    print("")
    print("Vulnerability details:")
    details = [message.render() for result in report.results for message in result.messages]
    if not details:
        print("No detailed messages available")
    for line in details:
        print(line)


def publish(verdict: Verdict, sink: metrics.MetricsSink, dims: Dict[str, str]) -> None:
    metrics.safe_emit(sink, metrics.INVOKED, 1, dims)
    if verdict.passed:
        metrics.safe_emit(sink, metrics.PASSED, 1, dims)
    else:
        metrics.safe_emit(sink, metrics.FAILED, verdict.concerning, dims)


def build_summary(verdict: Verdict, report: AggregateReport, target: str, repository: str) -> Dict[str, Any]:
    summary: Dict[str, Any] = {
        "generated_at": dt.datetime.now(dt.timezone.utc).isoformat(),
        "target": target,
        "repository": repository,
        "passed": verdict.passed,
        "concerning": verdict.concerning,
        "totals": verdict.totals.to_dict(),
        "results": [result.to_dict() for result in report.results],
        "skipped": [str(path) for path in report.skipped],
    }
    return summary


def write_summary(summary: Dict[str, Any], path: pathlib.Path) -> pathlib.Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(summary, indent=2, sort_keys=True), encoding="utf-8")
    return path
