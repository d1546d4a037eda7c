"""Command-line interface for the SBOM scan gate."""

from __future__ import annotations

import argparse
import logging
import pathlib
import sys
from typing import List, Optional

from sbomgate.core import config, gitmeta, pipeline
from sbomgate.core.errors import SbomGateError

RUN_SCAN = "run-scan"
ANALYZE_RESULTS = "analyze-results"
COMMANDS = (RUN_SCAN, ANALYZE_RESULTS)

USAGE = (
    "Usage: sbomgate {run-scan|analyze-results} <target> <repository> [head_ref]\n"
    "  run-scan: Execute the SBOM security scan\n"
    "  analyze-results: Analyze SBOM scan results and fail if vulnerabilities found"
)


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--source-root", type=pathlib.Path, default=None, help="Directory the configured target paths are relative to (default: cwd)")
    common.add_argument("--output-dir", type=pathlib.Path, default=None, help="Where SBOM and scan-result artifacts are written (default: source root)")
    common.add_argument("--results-paths", type=pathlib.Path, default=None, help="File listing scan-result artifacts, one absolute path per line")
    common.add_argument("--config", type=pathlib.Path, default=None, help="YAML file with 'targets' and 'metrics' sections")
    common.add_argument("--no-metrics", action="store_true", help="Do not publish CloudWatch metrics")
    common.add_argument("-v", "--verbose", action="store_true", help="Log progress at INFO level")

    parser = argparse.ArgumentParser(prog="sbomgate", description="Scan npm lockfiles with Inspector and gate on the results")
    subparsers = parser.add_subparsers(dest="command", required=True)

    scan = subparsers.add_parser(RUN_SCAN, parents=[common], help="Generate SBOMs and scan them")
    scan.add_argument("target")
    scan.add_argument("repository")
    scan.add_argument("head_ref", nargs="?", default=None)

    analyze = subparsers.add_parser(ANALYZE_RESULTS, parents=[common], help="Aggregate scan results and decide pass/fail")
    analyze.add_argument("target")
    analyze.add_argument("repository", help="Repository name, or the path of a results-paths file")
    analyze.add_argument("--summary-json", type=pathlib.Path, default=None, help="Also write the aggregated counts as JSON")
    return parser


def main(argv: List[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    if not argv or argv[0] not in COMMANDS:
        print(USAGE)
        return 1

    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING, format="%(message)s")

    repository = args.repository
    results_paths: Optional[pathlib.Path] = args.results_paths
    if args.command == ANALYZE_RESULTS and pathlib.Path(repository).is_file():
        results_paths = pathlib.Path(repository)
        repository = "unknown"

    try:
        settings = config.load_settings(
            source_root=args.source_root,
            output_dir=args.output_dir,
            results_paths=results_paths,
            config_path=args.config,
            metrics_enabled=False if args.no_metrics else None,
        )
        sink = pipeline.build_sink(settings)
        if args.command == RUN_SCAN:
            head_ref = gitmeta.resolve_head_ref(args.head_ref, settings.source_root)
            run = pipeline.run_scan(settings, args.target, repository, head_ref, sink=sink)
            print(f"Scanned {len(run.result_paths)} of {len(settings.targets)} configured directories")
            print(f"Results paths written to {run.manifest_path}")
            return 0
        analysis = pipeline.analyze_results(
            settings,
            args.target,
            repository,
            sink=sink,
            summary_path=args.summary_json,
        )
        return analysis.verdict.exit_code
    except SbomGateError as exc:
        print(f"Error: {exc}")
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
