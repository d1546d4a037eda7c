"""Submit an SBOM to the Amazon Inspector ScanSbom API."""

from __future__ import annotations

import json
import logging
import pathlib
from typing import Any, Dict, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from sbomgate.core.errors import ToolInvocationError

_LOG = logging.getLogger(__name__)

SERVICE = "inspector-scan"
OUTPUT_FORMAT = "INSPECTOR"


def scan_sbom(
    sbom_path: pathlib.Path,
    result_path: pathlib.Path,
    target: str,
    client: Optional[Any] = None,
) -> pathlib.Path:
    """Scan *sbom_path* and write the service response to *result_path*."""

    try:
        document = json.loads(sbom_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ToolInvocationError(SERVICE, target, f"unreadable SBOM {sbom_path}: {exc}") from exc

    _LOG.info("Invoking Inspector ScanSbom for %s", target)
    try:
        client = client or _client()
        response = client.scan_sbom(sbom=document, outputFormat=OUTPUT_FORMAT)
    except (BotoCoreError, ClientError) as exc:
        raise ToolInvocationError(SERVICE, target, str(exc)) from exc

    try:
        result_path.parent.mkdir(parents=True, exist_ok=True)
        result_path.write_text(json.dumps(_strip_metadata(response), indent=2), encoding="utf-8")
    except OSError as exc:
        raise ToolInvocationError(SERVICE, target, f"could not write {result_path}: {exc}") from exc
    return result_path


def _strip_metadata(response: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in response.items() if key != "ResponseMetadata"}


def _client() -> Any:
    return boto3.client(SERVICE)
