"""Core orchestration and aggregation logic for the SBOM scan gate."""

__all__ = [
    "aggregator",
    "config",
    "correlator",
    "errors",
    "gitmeta",
    "labels",
    "locator",
    "metrics",
    "pipeline",
    "severity",
    "targets",
    "verdict",
]
