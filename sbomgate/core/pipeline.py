"""The two independently invocable phases: run-scan and analyze-results."""

from __future__ import annotations

import logging
import pathlib
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from sbomgate.core import correlator, locator, metrics, verdict
from sbomgate.core.aggregator import AggregateReport, Aggregator
from sbomgate.core.config import Settings
from sbomgate.core.labels import LabelMap
from sbomgate.core.targets import ScanTarget
from sbomgate.runners import cyclonedx_npm, inspector

_LOG = logging.getLogger(__name__)

Generator = Callable[[ScanTarget, pathlib.Path, pathlib.Path], pathlib.Path]
Scanner = Callable[[pathlib.Path, pathlib.Path, str], pathlib.Path]


@dataclass
class ScanRun:
    targets: List[ScanTarget]
    result_paths: List[pathlib.Path] = field(default_factory=list)
    manifest_path: Optional[pathlib.Path] = None


@dataclass
class AnalysisRun:
    report: AggregateReport
    verdict: verdict.Verdict


def run_scan(
    settings: Settings,
    target: str,
    repository: str,
    head_ref: str,
    sink: Optional[metrics.MetricsSink] = None,
    generate: Optional[Generator] = None,
    scan: Optional[Scanner] = None,
) -> ScanRun:
    """Generate and scan an SBOM for every configured target that has a lockfile.

    The first tool failure aborts the run; result paths collected for earlier
    targets are still written to the results-paths file before it propagates.
    """

    generate = generate or cyclonedx_npm.generate
    scan = scan or inspector.scan_sbom
    sink = sink or metrics.NullSink()

    print("Security Scanning Started")
    print(f"Target: {target}")
    print(f"PR Branch (code being scanned): {head_ref}")

    labels = LabelMap(settings.targets)
    run = ScanRun(targets=locator.locate(settings.targets, settings.source_root))
    if not run.targets:
        _LOG.warning("⚠️ Warning: none of the %d configured directories has a lockfile", len(settings.targets))

    try:
        for scan_target in run.targets:
            names = labels.artifacts(scan_target.path, settings.output_dir)
            print(f"Generating SBOM for {scan_target.path}")
            generate(scan_target, settings.source_root, names.sbom_path)
            print(f"Invoking Inspector's ScanSbom API for {scan_target.path}")
            scan(names.sbom_path, names.result_path, scan_target.path)
            run.result_paths.append(names.result_path.resolve())
    finally:
        run.manifest_path = correlator.write_manifest(run.result_paths, settings.results_paths)
        _LOG.info("Wrote %d result path(s) to %s", len(run.result_paths), run.manifest_path)

    metrics.safe_emit(
        sink,
        metrics.SCAN_COMPLETE,
        1,
        metrics.dimensions(repository, settings.workflow),
    )
    return run


def analyze_results(
    settings: Settings,
    target: str,
    repository: str,
    sink: Optional[metrics.MetricsSink] = None,
    summary_path: Optional[pathlib.Path] = None,
) -> AnalysisRun:
    """Aggregate every listed scan result and decide pass/fail.

    Raises ``ResultsManifestNotFound`` before anything is computed when the
    results-paths file is absent.
    """

    sink = sink or metrics.NullSink()
    paths = correlator.read_manifest(settings.results_paths)

    aggregator = Aggregator(LabelMap(settings.targets))
    report = aggregator.run(paths)
    outcome = verdict.decide(report)
    verdict.render(outcome, report)
    verdict.publish(outcome, sink, metrics.dimensions(repository, settings.workflow, target))

    if summary_path is not None:
        summary = verdict.build_summary(outcome, report, target=target, repository=repository)
        verdict.write_summary(summary, summary_path)
    return AnalysisRun(report=report, verdict=outcome)


def build_sink(settings: Settings, client: Optional[Any] = None) -> metrics.MetricsSink:
    if not settings.metrics_enabled:
        return metrics.NullSink()
    return metrics.CloudWatchSink(settings.namespace, client=client)

