"""Metric emission for scan outcomes (CloudWatch by default)."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Protocol

import boto3

_LOG = logging.getLogger(__name__)

INVOKED = "Invoked"
PASSED = "Passed"
FAILED = "Failed"
SCAN_COMPLETE = "ScanComplete"


class MetricsSink(Protocol):
    def emit(self, name: str, value: float, dimensions: Dict[str, str]) -> None:
        ...


class NullSink:
    def emit(self, name: str, value: float, dimensions: Dict[str, str]) -> None:
        _LOG.debug("Metrics disabled; dropping %s=%s %s", name, value, dimensions)


class CloudWatchSink:
    def __init__(self, namespace: str, client: Optional[Any] = None) -> None:
        self.namespace = namespace
        self._client = client

    def emit(self, name: str, value: float, dimensions: Dict[str, str]) -> None:
        try:
            client = self._client or boto3.client("cloudwatch")
            client.put_metric_data(
                Namespace=self.namespace,
                MetricData=[
                    {
                        "MetricName": name,
                        "Dimensions": [{"Name": key, "Value": val} for key, val in dimensions.items()],
                        "Value": float(value),
                        "Unit": "Count",
                    }
                ],
            )
        except Exception as exc:  # fire-and-forget
            _LOG.warning("Failed to publish metric %s to %s: %s", name, self.namespace, exc)


def dimensions(repository: str, workflow: str, target: Optional[str] = None) -> Dict[str, str]:
    dims = {"Repository": repository, "Workflow": workflow}
    if target:
        dims["Target"] = target
    return dims


def safe_emit(sink: MetricsSink, name: str, value: float, dims: Dict[str, str]) -> None:
    """Emit through *sink*, logging rather than raising on failure."""

    try:
        sink.emit(name, value, dims)
    except Exception as exc:
        _LOG.warning("Metrics sink %s raised for %s: %s", type(sink).__name__, name, exc)
